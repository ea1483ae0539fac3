"""Prompt templates for LLM tag refinement."""

REFINE_SYSTEM_PROMPT = (
    "You are a helpful assistant that refines and improves tags for documents. "
    "Always respond with a JSON array of refined tags."
)

REFINE_PROMPT = """Below are tag candidates extracted automatically from a document. Keep only the meaningful ones and clean them up.

Tag candidates: {tags}

Start of the document:
{excerpt}

Refine the tags using these rules:
1. Drop verbs, particles and inflected fragments (e.g. "있었다", "이렇게", "했다").
2. Keep only real nouns, proper nouns and concept words.
3. Merge duplicates or near-synonyms into one representative tag.
4. Select at most {max_tags} of the most important tags.
5. Use the base form of each tag (e.g. "차들" -> "자동차").

Respond with a JSON array only. Example: ["tag1", "tag2", "tag3"]"""

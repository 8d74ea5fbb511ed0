"""
Index mapping for word documents.

``definitions`` is mapped as ``nested`` so that each definition is indexed
as its own sub-document. A flattened ``object`` mapping would let a filter
on ``type`` match the ``meaning`` of a different definition of the same word.
"""

WORD_FIELD = "word"
DEFINITIONS_PATH = "definitions"
DEFINITION_TYPE_FIELD = f"{DEFINITIONS_PATH}.type"
DEFINITION_MEANING_FIELD = f"{DEFINITIONS_PATH}.meaning"

WORD_INDEX_MAPPING = {
    "mappings": {
        "properties": {
            WORD_FIELD: {"type": "keyword"},
            DEFINITIONS_PATH: {
                "type": "nested",
                "properties": {
                    "type": {"type": "keyword"},
                    "meaning": {"type": "text"},
                },
            },
        }
    }
}

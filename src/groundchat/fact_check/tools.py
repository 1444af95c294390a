"""Tool declarations offered to the verification model."""

from ..llm import ToolDeclaration

GOOGLE_SEARCH_TOOL = ToolDeclaration(
    name="google_search",
    description="Search Google for information to verify facts",
    parameters={
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": "The search query"
            }
        },
        "required": ["query"]
    },
)

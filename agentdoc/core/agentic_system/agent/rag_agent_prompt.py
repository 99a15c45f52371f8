"""
RAG agent system prompt.

Builds the grounded system instruction: numbered [sourceN] excerpts, an
answer-only-from-excerpts rule, the citation format, and the fixed
phrase for questions the excerpts cannot answer.

Dependencies: langchain_core.prompts
System role: Prompt template for RAG agent behavior
"""

from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

from agentdoc.models.passage import Passage

INSUFFICIENT_INFORMATION = "I don't have enough information about that."

SYSTEM_PROMPT = (
    "You are a helpful assistant that answers questions based on the provided document excerpts. "
    "Answer using ONLY information from these excerpts and cite your sources using [source#] notation. "
    f'If the information needed is not in the excerpts, say "{INSUFFICIENT_INFORMATION}"\n'
    "When the user wants to see where a statement comes from, call the preview_source tool "
    "with the number of the source.\n\n"
    "Document excerpts:\n{context}"
)

RAG_AGENT_PROMPT = ChatPromptTemplate.from_messages(
    [
        ("system", SYSTEM_PROMPT),
        MessagesPlaceholder("messages"),
    ]
)


def format_context(passages: list[Passage]) -> str:
    """
    Label each passage [sourceN] with its title and page.

    Args:
        passages: Retrieved passages, in rank order

    Returns:
        str: Blank-line separated excerpts
    """
    return "\n\n".join(
        f"[source{index}] {passage.text} (From: {passage.title}, Page {passage.page})"
        for index, passage in enumerate(passages, start=1)
    )

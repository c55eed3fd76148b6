"""
Answer prompt.

The proxy places every selected document in the prompt in full, followed by
the question. The model may append citation lines that parse_citations reads.

Dependencies: langchain_core.prompts
System role: Prompt construction for the answer proxy
"""

from typing import Sequence

from langchain_core.prompts import PromptTemplate

from docchat.models.document import Document

ANSWER_TEMPLATE = """You are a helpful assistant that answers questions based on the content of uploaded documents.
Please analyze the following documents and answer the question.

DOCUMENTS:
{documents}

QUESTION:
{question}

Please provide a comprehensive but concise answer based solely on the information in these documents.
If the answer cannot be found in the documents, please state that clearly.

If you can point to where the answer came from, end your answer with any of these lines:
Source: <document name(s), comma separated>
Page: <page>
Section: <section>
Paragraph: <paragraph>
"""

ANSWER_PROMPT = PromptTemplate.from_template(ANSWER_TEMPLATE)


def format_documents(documents: Sequence[Document]) -> str:
    """Render documents as 'Document: name / Content: text' blocks."""
    return "\n\n".join(f"Document: {doc.name}\nContent: {doc.content}" for doc in documents)


def build_answer_prompt(question: str, documents: Sequence[Document]) -> str:
    """
    Build the full prompt text.

    Args:
        question: User's question
        documents: Resolved documents

    Returns:
        str: Prompt ready for an AnswerModel
    """
    return ANSWER_PROMPT.format(documents=format_documents(documents), question=question.strip())

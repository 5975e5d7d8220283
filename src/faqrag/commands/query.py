# src/faqrag/commands/query.py
"""Query command - ask the knowledge base a question.

This module provides the core query logic that the CLI uses.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from faqrag.commands.base import Citation, QueryResult
from faqrag.config import ConfigError, create_service, get_faqrag_config
from faqrag.exceptions import InputError

if TYPE_CHECKING:
    from faqrag.service import RagService


def query(
    question: str,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> QueryResult:
    """Answer a question from the knowledge base.

    Args:
        question: The question to ask
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        QueryResult with answer and cited sources
    """
    config = get_faqrag_config(data_dir, config_path)
    if isinstance(config, ConfigError):
        return QueryResult(success=False, query=question, error=config.message)

    try:
        service = create_service(config)
    except Exception as e:
        return QueryResult(success=False, query=question, error=f"Failed to create service: {e}")

    with service:
        return query_with_service(service, question)


def query_with_service(service: RagService, question: str) -> QueryResult:
    """Query using an existing RagService instance.

    Args:
        service: Existing RagService instance
        question: The question to ask

    Returns:
        QueryResult with answer and cited sources
    """
    try:
        response = service.run_query(question)
    except InputError as e:
        return QueryResult(success=False, query=question, error=str(e))
    except Exception as e:
        return QueryResult(success=False, query=question, error=f"Query failed: {e}")

    return QueryResult(
        success=True,
        query=question,
        answer=response.answer,
        sources=[
            Citation(
                title=source.title,
                url=source.url,
                snippet=source.snippet,
                score=source.score,
                chunk_id=source.id,
            )
            for source in response.sources
        ],
    )

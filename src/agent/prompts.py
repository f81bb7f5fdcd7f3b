"""Prompt construction for the dashboard assistant."""

import json
from typing import Any, Mapping, Sequence

from langchain_core.prompts import ChatPromptTemplate

from profiling.models import ChartSpec

CONTEXT_SAMPLE_ROWS = 3

# Literal braces are doubled for ChatPromptTemplate.
ANALYST_PROMPT = (
    "You are a data analysis assistant. Here's the dataset context:\n\n"
    "{data_context}\n\n"
    "User question: {question}\n\n"
    "IMPORTANT: If the user asks you to create any kind of chart or visualization, "
    "you MUST respond with ONLY a JSON object and nothing else. No explanation, "
    "no text before or after. Just the raw JSON in this exact format:\n"
    '{{"chartType": "bar", "title": "Chart Title", "data": '
    '[{{"name": "Category1", "value": 123}}, {{"name": "Category2", "value": 456}}]}}\n\n'
    "Supported chart types: bar, line, pie, area\n\n"
    "If the user is NOT asking for a chart, provide a helpful analysis of their data."
)


def build_data_context(
    dataset_name: str,
    records: Sequence[Mapping[str, Any]],
    columns: Sequence[str],
    charts: Sequence[ChartSpec],
) -> str:
    """Summarize the loaded dataset for the agent: size, columns, charts, sample rows."""
    chart_lines = "\n".join(f"- {chart.title}" for chart in charts)
    sample = json.dumps(
        [dict(record) for record in records[:CONTEXT_SAMPLE_ROWS]], indent=2, default=str
    )
    return (
        f"Dataset: {dataset_name}\n"
        f"Total Rows: {len(records)}\n"
        f"Columns: {', '.join(columns)}\n\n"
        f"Available Charts:\n{chart_lines}\n\n"
        f"Sample Data (first {CONTEXT_SAMPLE_ROWS} rows):\n{sample}"
    )


def build_chart_prompt() -> ChatPromptTemplate:
    return ChatPromptTemplate.from_messages([("user", ANALYST_PROMPT)])

"""DataMind Analysis - Prompt builders."""

from collections.abc import Sequence

from datamind.modules.agent.schemas import ChatMessage

ANALYSIS_SYSTEM_INSTRUCTION = "You are a helpful data visualization assistant. You only output valid JSON."


def build_initial_analysis_prompt(columns: Sequence[str], sample: str, sample_size: int) -> str:
    return f"""You are an expert Data Analyst Agent.
I have a dataset with the following columns: {', '.join(columns)}.
Here is a sample of the data (first {sample_size} rows in CSV format):

{sample}

Please analyze this data structure.
1. Give the dataset a title.
2. Write a short summary of what this data likely represents.
3. Create 4 distinct, insightful charts to visualize key trends or distributions.
   - Ensure xAxisKey and yAxisKey exist in the columns.
   - Choose appropriate chart types (bar for comparisons, line for trends, pie for distribution, scatter for correlation)."""


def _format_history(history: Sequence[ChatMessage]) -> str:
    speaker = {"user": "User", "model": "Assistant"}
    return "\n".join(f"{speaker[m.role]}: {m.content}" for m in history)


def build_chat_prompt(
    columns: Sequence[str],
    sample: str,
    user_message: str,
    history: Sequence[ChatMessage] = (),
) -> str:
    history_block = ""
    if history:
        history_block = f"\nConversation so far:\n{_format_history(history)}\n"

    return f"""You are a Data Analyst Agent.
Context: Dataset with columns: {', '.join(columns)}.
Sample Data:
{sample}
{history_block}
User Question: "{user_message}"

Answer the user's question based on the data structure (you cannot calculate exact aggregations on the full dataset, so explain *how* the data shows this or infer from the sample if obvious, or suggest a chart).

If the user asks to "show", "visualize", "plot", or "graph" something, provide a 'newChart' configuration in the JSON response.
Otherwise, just provide the 'textResponse'."""

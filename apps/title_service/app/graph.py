# apps/title_service/app/graph.py

from langgraph.graph import StateGraph, END
from .state import PipelineState
from .nodes import call_upstream, extract_text, parse_result


def should_continue(state: PipelineState) -> str:
    return "end" if state.get("error") else "continue"


def build_pipeline():
    workflow = StateGraph(PipelineState)

    workflow.add_node("call_upstream", call_upstream)
    workflow.add_node("extract_text", extract_text)
    workflow.add_node("parse_result", parse_result)

    workflow.set_entry_point("call_upstream")

    # Any stage error ends the run; the orchestrator reads it from state.
    workflow.add_conditional_edges(
        "call_upstream",
        should_continue,
        {"continue": "extract_text", "end": END},
    )
    workflow.add_conditional_edges(
        "extract_text",
        should_continue,
        {"continue": "parse_result", "end": END},
    )
    workflow.add_edge("parse_result", END)

    return workflow.compile()


pipeline = build_pipeline()

from team_graph.reporting.markdown_report import render_markdown_report, write_report

__all__ = ["render_markdown_report", "write_report"]

"""
html_generation.py - HTML leaderboard for a ranked pool
"""

import html
from datetime import datetime
from typing import List, Tuple

from .models import Item, RatingRecord


def generate_leaderboard_html(pool: str, rows: List[Tuple[Item, RatingRecord]],
                              progress: float, complete: bool) -> str:
    """Render a leaderboard as a standalone Bootstrap page."""
    body = []
    for rank, (item, record) in enumerate(rows, 1):
        body.append(
            f"<tr><td>{rank}</td><td>{html.escape(item.label)}</td>"
            f"<td>{record.score:.0f}</td><td>{record.comparisons_seen}</td></tr>"
        )
    rows_text = "\n".join(body)
    status = "Rankings locked in" if complete else f"{progress:.0%} ranked"
    generated = datetime.now().strftime("%Y-%m-%d %H:%M")
    return f"""<!DOCTYPE html>
<html lang='en'>
<head>
<meta charset='UTF-8'>
<title>Show Rankings – {html.escape(pool)}</title>
<link href='https://cdn.jsdelivr.net/npm/bootstrap@5.3.0-alpha1/dist/css/bootstrap.min.css' rel='stylesheet'>
</head>
<body>
<div class='container'>
<h1>Show Rankings: {html.escape(pool)}</h1>
<p class='text-muted'>{status} · generated {generated}</p>
<table class='table table-striped'><thead><tr><th>Rank</th><th>Show</th><th>Elo</th><th>Comparisons</th></tr></thead><tbody>
{rows_text}
</tbody></table>
</div>
</body>
</html>"""

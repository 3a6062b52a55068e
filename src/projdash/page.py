"""Static HTML dashboard page for projdash."""

import html
import os
from pathlib import Path
from urllib.parse import quote

from projdash.models import Dashboard, DirectoryEntry

DEFAULT_TITLE = "My Local Projects"

FONT_AWESOME_URL = "https://cdnjs.cloudflare.com/ajax/libs/font-awesome/6.5.2/css/all.min.css"

SORT_OPTIONS = (
    ("mtime-desc", "Newest"),
    ("mtime-asc", "Oldest"),
    ("name-asc", "Name (A-Z)"),
    ("name-desc", "Name (Z-A)"),
    ("size-desc", "Size (largest)"),
    ("size-asc", "Size (smallest)"),
)

STYLE = """
:root {
    --bg: #0f1117;
    --card: #181b24;
    --card-hover: #20242f;
    --border: #2a2f3c;
    --text: #e6e8ee;
    --muted: #8b93a7;
    --accent: #e0ac7a;
}
* { box-sizing: border-box; }
body {
    margin: 0;
    font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
    background: var(--bg);
    color: var(--text);
    min-height: 100vh;
    display: flex;
    flex-direction: column;
}
.container { width: 100%; max-width: 1200px; margin: 0 auto; padding: 2rem 1.5rem; flex: 1; }
.header { display: flex; justify-content: space-between; align-items: flex-end; gap: 1rem; margin-bottom: 2rem; }
.header h1 { margin: 0 0 .25rem; font-size: 1.8rem; }
.header p { margin: 0; color: var(--muted); font-family: monospace; word-break: break-all; }
.header .summary { color: var(--muted); white-space: nowrap; }
.controls { display: flex; flex-wrap: wrap; gap: 1rem; margin-bottom: 1.5rem; }
.search-bar { position: relative; flex: 1; min-width: 220px; }
.search-bar i { position: absolute; left: .9rem; top: 50%; transform: translateY(-50%); color: var(--muted); }
.search-bar input, .sort-select {
    width: 100%;
    padding: .7rem .9rem;
    background: var(--card);
    border: 1px solid var(--border);
    border-radius: 8px;
    color: var(--text);
    font-size: .95rem;
}
.search-bar input { padding-left: 2.4rem; }
.control-group { display: flex; gap: .75rem; }
.sort-select { width: auto; }
.view-toggle { display: flex; border: 1px solid var(--border); border-radius: 8px; overflow: hidden; }
.view-toggle button { background: var(--card); border: 0; color: var(--muted); padding: 0 .9rem; cursor: pointer; }
.view-toggle button.active { background: var(--accent); color: #1b1b1b; }
#projectGrid { display: grid; gap: 1rem; }
.grid-view #projectGrid { grid-template-columns: repeat(auto-fill, minmax(220px, 1fr)); }
.list-view #projectGrid { grid-template-columns: 1fr; gap: 0; }
.project-list-header { display: none; }
.list-view .project-list-header {
    display: grid;
    grid-template-columns: 1fr 200px 120px;
    padding: .5rem 1rem;
    color: var(--muted);
    font-size: .8rem;
    text-transform: uppercase;
    border-bottom: 1px solid var(--border);
}
.project-item {
    display: flex;
    flex-direction: column;
    gap: .5rem;
    padding: 1.1rem;
    background: var(--card);
    border: 1px solid var(--border);
    border-radius: 10px;
    color: inherit;
    text-decoration: none;
    transition: background .15s, transform .15s;
}
.project-item:hover { background: var(--card-hover); transform: translateY(-2px); }
.item-icon { display: flex; align-items: center; gap: .6rem; font-weight: 600; }
.item-icon i { color: var(--accent); font-size: 1.3rem; }
.item-name { overflow: hidden; text-overflow: ellipsis; white-space: nowrap; }
.item-meta-modified, .item-meta-size { color: var(--muted); font-size: .85rem; display: flex; gap: .5rem; align-items: center; }
.list-view .project-item {
    display: grid;
    grid-template-columns: 1fr 200px 120px;
    align-items: center;
    border-radius: 0;
    border-width: 0 0 1px;
    padding: .75rem 1rem;
}
.list-view .project-item:hover { transform: none; }
.list-view .item-meta-modified i, .list-view .item-meta-size i { display: none; }
.list-view .item-meta-size { justify-content: flex-end; }
.empty-state { grid-column: 1 / -1; text-align: center; padding: 4rem 1rem; color: var(--muted); }
.empty-state i { font-size: 3rem; color: var(--accent); }
.no-results { display: none; text-align: center; padding: 2rem; color: var(--muted); }
.footer { text-align: center; padding: 1.5rem; color: var(--muted); font-size: .85rem; }
@media (max-width: 640px) {
    .header { flex-direction: column; align-items: flex-start; }
    .list-view .project-list-header { display: none; }
    .list-view .project-item { grid-template-columns: 1fr; gap: .3rem; }
    .list-view .item-meta-modified i, .list-view .item-meta-size i { display: inline-block; }
    .list-view .item-meta-size { justify-content: flex-start; }
}
"""

SCRIPT = """
document.addEventListener('DOMContentLoaded', function() {
    const searchInput = document.getElementById('searchInput');
    const sortSelect = document.getElementById('sortSelect');
    const projectContainer = document.getElementById('projectContainer');
    const projectGrid = document.getElementById('projectGrid');
    const gridViewBtn = document.getElementById('gridViewBtn');
    const listViewBtn = document.getElementById('listViewBtn');
    const noResults = document.getElementById('noResults');
    const projectItems = Array.from(projectGrid.querySelectorAll('.project-item'));

    function filterProjects() {
        const filter = searchInput.value.toLowerCase();
        let visible = 0;
        projectItems.forEach(item => {
            const match = item.dataset.name.includes(filter);
            item.style.display = match ? '' : 'none';
            if (match) visible++;
        });
        noResults.style.display = (projectItems.length && !visible) ? 'block' : 'none';
    }

    function sortProjects() {
        const [sortBy, sortDir] = sortSelect.value.split('-');
        projectItems.sort((a, b) => {
            let valA, valB;
            if (sortBy === 'name') {
                valA = a.dataset.name;
                valB = b.dataset.name;
            } else {
                valA = parseInt(a.dataset[sortBy], 10);
                valB = parseInt(b.dataset[sortBy], 10);
            }
            let comparison = 0;
            if (valA > valB) {
                comparison = 1;
            } else if (valA < valB) {
                comparison = -1;
            }
            return sortDir === 'desc' ? -comparison : comparison;
        });
        projectItems.forEach(item => projectGrid.appendChild(item));
    }

    function setView(view) {
        const list = view === 'list';
        projectContainer.classList.toggle('list-view', list);
        projectContainer.classList.toggle('grid-view', !list);
        listViewBtn.classList.toggle('active', list);
        gridViewBtn.classList.toggle('active', !list);
    }

    searchInput.addEventListener('input', filterProjects);
    sortSelect.addEventListener('change', sortProjects);
    gridViewBtn.addEventListener('click', () => setView('grid'));
    listViewBtn.addEventListener('click', () => setView('list'));
});
"""


def _esc(value: str) -> str:
    return html.escape(value, quote=True)


def render_entry(entry: DirectoryEntry) -> str:
    """Render one project card/row."""
    href = quote(os.fsencode(entry.name), safe="") + "/"
    return (
        f'<a href="{href}" target="_blank" class="project-item"'
        f' data-name="{_esc(entry.name.lower())}"'
        f' data-mtime="{entry.mtime}" data-size="{entry.size_bytes}">'
        '<div class="item-icon"><i class="fas fa-folder"></i>'
        f'<span class="item-name">{_esc(entry.name)}</span></div>'
        '<div class="item-meta-modified"><i class="fas fa-clock"></i>'
        f"<span>{_esc(entry.mtime_display)}</span></div>"
        '<div class="item-meta-size"><i class="fas fa-hdd"></i>'
        f"<span>{_esc(entry.size_display)}</span></div>"
        "</a>"
    )


def render_empty_state(root: str) -> str:
    return (
        '<div class="empty-state"><i class="fas fa-folder-open"></i>'
        "<h3>No Projects</h3>"
        f"<p>Create a project folder inside <code>{_esc(root)}</code></p></div>"
    )


def render_dashboard(dashboard: Dashboard, title: str = DEFAULT_TITLE) -> str:
    """
    Render the full dashboard page.

    The page is self-contained apart from the icon font. Entries keep the
    order they have on the dashboard (newest first by default), and the
    embedded script handles search, re-sorting and the grid/list toggle.

    Args:
        dashboard: Scan result to render
        title: Page heading and <title>

    Returns:
        HTML document as a string
    """
    options = "".join(
        f'<option value="{value}">{label}</option>' for value, label in SORT_OPTIONS
    )

    if dashboard.is_empty:
        items = render_empty_state(dashboard.root)
    else:
        items = "\n".join(render_entry(e) for e in dashboard.entries)

    count = len(dashboard.entries)
    summary = f"{count} project{'' if count == 1 else 's'}"
    generated = dashboard.generated_at.strftime("%d %b %Y, %H:%M")

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{_esc(title)}</title>
<link rel="stylesheet" href="{FONT_AWESOME_URL}">
<style>{STYLE}</style>
</head>
<body>
<div class="container">
<header class="header">
<div class="header-title">
<h1>{_esc(title)}</h1>
<p>{_esc(dashboard.root)}</p>
</div>
<div class="summary">{summary}</div>
</header>
<div class="controls">
<div class="search-bar">
<i class="fas fa-search"></i>
<input type="text" id="searchInput" placeholder="Search projects..." aria-label="Search projects">
</div>
<div class="control-group">
<select id="sortSelect" class="sort-select" aria-label="Sort projects">{options}</select>
<div class="view-toggle">
<button type="button" id="gridViewBtn" class="active" aria-label="Grid view"><i class="fas fa-th-large"></i></button>
<button type="button" id="listViewBtn" aria-label="List view"><i class="fas fa-bars"></i></button>
</div>
</div>
</div>
<main class="project-content grid-view" id="projectContainer">
<div class="project-list-header"><div>Project</div><div>Last Modified</div><div>Size</div></div>
<div id="projectGrid">
{items}
</div>
<div class="no-results" id="noResults">No projects match your search.</div>
</main>
</div>
<footer class="footer">Generated {_esc(generated)}</footer>
<script>{SCRIPT}</script>
</body>
</html>
"""


def write_dashboard(dashboard: Dashboard, output_path: Path, title: str = DEFAULT_TITLE) -> Path:
    """Write the rendered page to output_path and return it."""
    output_path.write_text(render_dashboard(dashboard, title), encoding="utf-8", errors="replace")
    return output_path

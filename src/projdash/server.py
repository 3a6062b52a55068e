"""Local HTTP server that regenerates the dashboard on every request."""

from datetime import tzinfo
from functools import partial
from http.server import HTTPServer, SimpleHTTPRequestHandler
from pathlib import Path
from typing import Optional
from urllib.parse import urlsplit

from projdash.analyzer import scan_projects
from projdash.display import console, plain, show_warnings
from projdash.page import DEFAULT_TITLE, render_dashboard
from projdash.scanner import ScanFailure

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000

DASHBOARD_PATHS = ("/", "/index.html")


class DashboardHandler(SimpleHTTPRequestHandler):
    """Serve the dashboard at / and everything else as static files from root."""

    def __init__(
        self,
        *args,
        root: Path,
        title: str = DEFAULT_TITLE,
        tz: Optional[tzinfo] = None,
        **kwargs,
    ):
        self.root = root
        self.title = title
        self.tz = tz
        super().__init__(*args, directory=str(root), **kwargs)

    def do_GET(self):
        if urlsplit(self.path).path in DASHBOARD_PATHS:
            self.send_dashboard()
            return
        super().do_GET()

    def send_dashboard(self):
        try:
            dashboard = scan_projects(self.root, tz=self.tz)
        except ScanFailure as e:
            self.send_error(500, str(e))
            return

        show_warnings(dashboard)
        self.send_html(render_dashboard(dashboard, self.title))

    def send_html(self, content: str):
        body = content.encode("utf-8", errors="replace")
        self.send_response(200)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.send_header("Cache-Control", "no-store")
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        console.print(f"[dim]{self.address_string()} - {plain(format % args)}[/dim]")


def make_server(
    root: Path,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    title: str = DEFAULT_TITLE,
    tz: Optional[tzinfo] = None,
) -> HTTPServer:
    """
    Create (but don't start) a dashboard server for root.

    Args:
        root: Directory to scan and serve
        host: Interface to bind
        port: Port to bind, 0 for any free port
        title: Page title
        tz: Timezone for displayed timestamps

    Returns:
        Bound server, ready for serve_forever()
    """
    handler = partial(DashboardHandler, root=root.resolve(), title=title, tz=tz)
    return HTTPServer((host, port), handler)


def serve_dashboard(
    root: Path,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    title: str = DEFAULT_TITLE,
    tz: Optional[tzinfo] = None,
) -> None:
    """Serve the dashboard until interrupted."""
    server = make_server(root, host, port, title, tz)
    bound_host, bound_port = server.server_address[:2]
    console.print(f"[bold blue]Serving {plain(str(root.resolve()))}[/bold blue]")
    console.print(f"  http://{bound_host}:{bound_port}/  [dim](Ctrl+C to stop)[/dim]")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopped[/yellow]")
    finally:
        server.server_close()

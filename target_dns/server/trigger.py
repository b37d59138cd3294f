"""
HTTP trigger module for Target-DNS.

This module serves on-demand reconciliation and health check endpoints. Requests are
handled on a server thread and reconciliation runs on the controller's event loop.
"""

import asyncio
import json
import logging
from http.server import BaseHTTPRequestHandler, HTTPServer
from threading import Thread

SYNC_PATHS = ("/", "/sync")
SCHEDULER_AGENT = "Cloudflare-Workers"


class TriggerHandler(BaseHTTPRequestHandler):
    """
    HTTP request handler for trigger and health check endpoints.
    """

    # Set by TriggerServer
    controller = None
    loop = None
    timeout_seconds = 300

    def __init__(self, *args, **kwargs):
        self.logger = logging.getLogger("target-dns.server")
        super().__init__(*args, **kwargs)

    def do_GET(self):
        """
        Handle GET requests.
        """
        path = self.path.split("?", 1)[0]
        if path == "/health":
            self._send(200, "application/json", json.dumps({"status": "healthy"}))
        elif path in SYNC_PATHS:
            self._handle_sync()
        else:
            self._method_not_allowed()

    def do_POST(self):
        self._method_not_allowed()

    do_PUT = do_POST
    do_PATCH = do_POST
    do_DELETE = do_POST
    do_OPTIONS = do_POST

    def do_HEAD(self):
        self.send_response(405)
        self.send_header("Content-type", "text/plain")
        self.end_headers()

    def _handle_sync(self):
        """
        Run a reconciliation and report the result to the caller.
        """
        from_scheduler = SCHEDULER_AGENT in (self.headers.get("User-Agent") or "")
        if from_scheduler:
            self.logger.info(
                "Received HTTP request from the scheduler, running synchronization."
            )
        else:
            self.logger.info("Triggered by direct HTTP GET request.")

        try:
            if from_scheduler:
                self._run(self.controller.run_once())
                self._send(
                    200,
                    "text/plain",
                    "Executed by scheduled trigger via HTTP. DNS records updated.",
                )
            else:
                records = self._run(self.controller.sync_and_list())
                self._send(200, "application/json", json.dumps(records, indent=2))
        except Exception as e:
            self.logger.error(f"Error handling HTTP trigger: {e}", exc_info=True)
            prefix = (
                "Error during scheduled HTTP execution" if from_scheduler else "Error"
            )
            self._send(500, "text/plain", f"{prefix}: {e}")

    def _run(self, coro):
        future = asyncio.run_coroutine_threadsafe(coro, self.loop)
        return future.result(timeout=self.timeout_seconds)

    def _method_not_allowed(self):
        self._send(405, "text/plain", "Method Not Allowed or Invalid Path")

    def _send(self, status: int, content_type: str, body: str):
        self.send_response(status)
        self.send_header("Content-type", content_type)
        self.end_headers()
        self.wfile.write(body.encode())

    def log_message(self, format, *args):
        """
        Override log_message to use the application logger.
        """
        self.logger.debug(format % args)


class TriggerServer:
    """
    HTTP server for the trigger endpoints.
    """

    def __init__(
        self,
        controller,
        loop: asyncio.AbstractEventLoop,
        host: str = "0.0.0.0",
        port: int = 8080,
    ):
        """
        Initialize a TriggerServer.

        Args:
            controller: Controller running the reconciliation
            loop: Event loop the controller runs on
            host: Host to bind to
            port: Port to bind to
        """
        self.controller = controller
        self.loop = loop
        self.host = host
        self.port = port
        self.server = None
        self.thread = None
        self.logger = logging.getLogger("target-dns.server")

    def start(self):
        """
        Start the trigger server.
        """
        handler = type(
            "BoundTriggerHandler",
            (TriggerHandler,),
            {"controller": self.controller, "loop": self.loop},
        )
        self.server = HTTPServer((self.host, self.port), handler)
        self.port = self.server.server_address[1]
        self.thread = Thread(target=self.server.serve_forever)
        self.thread.daemon = True
        self.thread.start()
        self.logger.info(f"Trigger: {self.host}:{self.port}/sync")

    def stop(self):
        """
        Stop the trigger server.
        """
        if self.server:
            self.server.shutdown()
            self.server.server_close()
            self.logger.info("Trigger server stopped")

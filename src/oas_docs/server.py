"""Static file server for the generated document and the Swagger UI bundle.

The server is an explicit Starlette application owned by the caller; nothing
is registered globally.
"""

import logging
import threading
from pathlib import Path

import uvicorn
from pydantic import BaseModel
from starlette.applications import Starlette
from starlette.routing import Mount
from starlette.staticfiles import StaticFiles

from oas_docs.errors import ConfigurationError, ServeError

logger = logging.getLogger(__name__)

DEFAULT_ROUTE = "/api"
DEFAULT_DIRECTORY = "./internal/dist"


class SwaggerUIConfig(BaseModel):
    port: int | None = None
    route: str = DEFAULT_ROUTE
    host: str = "127.0.0.1"
    directory: str = DEFAULT_DIRECTORY


def _check_config(config: SwaggerUIConfig | None) -> SwaggerUIConfig:
    if config is None:
        raise ConfigurationError("swagger config is required")
    if config.port is None:
        raise ConfigurationError("swagger config requires a port")
    return config


def create_app(config: SwaggerUIConfig) -> Starlette:
    """Build an app serving config.directory under config.route.

    An empty route falls back to DEFAULT_ROUTE. Directory requests resolve to
    that directory's index.html and 404 when it is missing; paths escaping
    the directory are refused by StaticFiles.
    """
    route = (config.route or DEFAULT_ROUTE).rstrip("/")
    if not Path(config.directory).is_dir():
        logger.warning(
            "SwaggerUI directory %s does not exist; requests will fail until it is created",
            config.directory,
        )
    files = StaticFiles(directory=config.directory, html=True, check_dir=False)
    return Starlette(routes=[Mount(route, app=files, name="swagger-ui")])


class SwaggerUIServer:
    """A uvicorn server with an explicit start/stop lifecycle."""

    def __init__(self, config: SwaggerUIConfig | None):
        self.config = _check_config(config)
        self.app = create_app(self.config)
        self._server = uvicorn.Server(
            uvicorn.Config(self.app, host=self.config.host, port=self.config.port, log_level="info")
        )
        self._thread: threading.Thread | None = None
        self._error: ServeError | None = None

    def serve(self) -> None:
        """Run the server on the calling thread until stop() is called."""
        logger.info("Serving SwaggerUI on HTTP port: %s", self.config.port)
        try:
            self._server.run()
        except SystemExit as e:
            # uvicorn exits the process when the socket cannot be bound
            raise ServeError(f"an error occurred while serving SwaggerUI: exit code {e.code}") from e
        except OSError as e:
            raise ServeError(f"an error occurred while serving SwaggerUI: {e}") from e

    def _serve_in_thread(self) -> None:
        try:
            self.serve()
        except ServeError as e:
            self._error = e

    def _raise_error(self) -> None:
        error, self._error = self._error, None
        if error is not None:
            raise error

    def start(self) -> None:
        """Run the server on a background thread.

        Returns once the listener is up. Raises ServeError when it fails to
        start.
        """
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._serve_in_thread, name="swagger-ui", daemon=True)
        self._thread.start()

        while not self._server.started and self._thread.is_alive():
            self._thread.join(0.05)

        if not self._thread.is_alive():
            self._thread = None
            self._raise_error()

    def stop(self, timeout: float | None = None) -> None:
        """Request shutdown; re-raises a ServeError the server stopped with."""
        self._server.should_exit = True
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        self._raise_error()


def serve_swagger_ui(config: SwaggerUIConfig | None) -> None:
    """Serve the Swagger UI directory, blocking until the server stops."""
    SwaggerUIServer(config).serve()

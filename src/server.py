import asyncio
import logging
import signal
from typing import Any

from dotenv import load_dotenv
from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from config import ServerConfig
from surface.fetcher import SpecFetcher
from tools import (
    CAPABILITY_MATRIX_TOOL,
    SURFACE_MAP_TOOL,
    ToolResponse,
    build_discovery_manifest,
    format_tool_response_markdown,
    is_authorized,
    read_params,
    run_capability_matrix,
    run_surface_map,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

load_dotenv()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


class OpalToolsServer:
    def __init__(self, config: ServerConfig) -> None:
        self.config = config
        self.server = FastMCP()
        self._shutdown_requested = False

        self.spec_fetcher = SpecFetcher(timeout_seconds=config.spec_fetch_timeout_seconds)

    def signal_handler(self, sig: int, frame: Any = None) -> None:
        """Handle termination signals for graceful shutdown."""
        logger.info("Received signal %s, initiating graceful shutdown...", sig)
        self._shutdown_requested = True

    async def openapi_surface_map(self, spec_url: str) -> str:
        if self._shutdown_requested:
            return format_tool_response_markdown(SURFACE_MAP_TOOL, self._shutdown_response())

        response = await run_surface_map({"spec_url": spec_url}, self.spec_fetcher)
        return format_tool_response_markdown(SURFACE_MAP_TOOL, response)

    async def capability_coverage_matrix(
        self,
        user_request: str,
        max_capabilities: int = 25,
        max_evidence_per_capability: int = 3,
    ) -> str:
        if self._shutdown_requested:
            return format_tool_response_markdown(CAPABILITY_MATRIX_TOOL, self._shutdown_response())

        response = await run_capability_matrix(
            {
                "user_request": user_request,
                "max_capabilities": max_capabilities,
                "max_evidence_per_capability": max_evidence_per_capability,
            },
            self.spec_fetcher,
            self.config.scoring_weights,
        )
        return format_tool_response_markdown(CAPABILITY_MATRIX_TOOL, response)

    async def handle_tool_request(self, tool_name: str, request: Request) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=CORS_HEADERS)
        if request.method != "POST":
            return self._json({"error": "Method not allowed. Use POST."}, status_code=405)
        if not is_authorized(request.headers.get("authorization"), self.config.tool_bearer_token):
            return self._json({"error": "Unauthorized (bad or missing bearer token)"}, status_code=401)
        if self._shutdown_requested:
            return self._json(self._shutdown_response().payload, status_code=503)

        params = read_params(await request.body())
        if tool_name == SURFACE_MAP_TOOL:
            response = await run_surface_map(params, self.spec_fetcher)
        else:
            response = await run_capability_matrix(params, self.spec_fetcher, self.config.scoring_weights)
        return self._json(response.payload, status_code=response.status_code)

    async def handle_discovery(self, request: Request) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=CORS_HEADERS)
        if request.method != "GET":
            return self._json({"error": "Method not allowed. Use GET."}, status_code=405)
        return self._json(build_discovery_manifest())

    @staticmethod
    def _json(payload: dict[str, Any], status_code: int = 200) -> JSONResponse:
        return JSONResponse(payload, status_code=status_code, headers=CORS_HEADERS)

    @staticmethod
    def _shutdown_response() -> ToolResponse:
        return ToolResponse(status_code=503, payload={"error": "Server is shutting down."})

    def _register_tools(self) -> None:
        tools = [
            (
                self.openapi_surface_map,
                "openapi_surface_map",
                "Fetch an OpenAPI/Swagger spec and return its normalized surface map: base URLs, auth schemes, endpoints.",
            ),
            (
                self.capability_coverage_matrix,
                "capability_coverage_matrix",
                "Extract capabilities from an integration request and score them against the linked OpenAPI spec.",
            ),
        ]

        for tool_func, tool_name, description in tools:
            self.server.tool(tool_func, name=tool_name, description=description)
            logger.info("Registered tool: %s", tool_name)

    def _register_http_endpoints(self) -> None:
        @self.server.custom_route("/discovery", methods=["GET", "POST", "OPTIONS"])
        async def discovery(request: Request) -> Response:
            return await self.handle_discovery(request)

        @self.server.custom_route(f"/tools/{SURFACE_MAP_TOOL}", methods=["GET", "POST", "OPTIONS"])
        async def surface_map_tool(request: Request) -> Response:
            return await self.handle_tool_request(SURFACE_MAP_TOOL, request)

        @self.server.custom_route(f"/tools/{CAPABILITY_MATRIX_TOOL}", methods=["GET", "POST", "OPTIONS"])
        async def capability_matrix_tool(request: Request) -> Response:
            return await self.handle_tool_request(CAPABILITY_MATRIX_TOOL, request)

        for route in (f"/tools/{SURFACE_MAP_TOOL}", f"/tools/{CAPABILITY_MATRIX_TOOL}"):
            logger.info("Registered HTTP tool route: %s", route)

    def _register_health_endpoints(self) -> None:
        @self.server.custom_route("/health", methods=["GET"])
        async def health_check(request: Request) -> Response:
            return JSONResponse({"status": "ok", "service": "opal-api-coverage"})

        @self.server.custom_route("/ready", methods=["GET"])
        async def readiness_check(request: Request) -> Response:
            return self.readiness_response()

    def readiness_response(self) -> JSONResponse:
        if self._shutdown_requested:
            return JSONResponse({"status": "not_ready", "reason": "shutting_down"}, status_code=503)
        return JSONResponse({"status": "ready", "service": "opal-api-coverage", "mode": "openapi-coverage-tools"})

    async def _run_server(self) -> None:
        tasks = [
            self.server.run_http_async(
                transport="streamable-http",
                host="0.0.0.0",
                path="/opal/mcp",
                port=self.config.streamable_http_port,
            ),
            self.server.run_http_async(
                transport="sse",
                host="0.0.0.0",
                path="/opal/sse",
                port=self.config.sse_port,
            ),
        ]
        await asyncio.gather(*tasks)

    async def run(self) -> None:
        signal.signal(signal.SIGINT, lambda sig, frame: self.signal_handler(sig, frame))
        signal.signal(signal.SIGTERM, lambda sig, frame: self.signal_handler(sig, frame))

        self._register_tools()
        self._register_http_endpoints()
        self._register_health_endpoints()

        try:
            logger.info("Starting Opal API coverage server...")
            await self._run_server()
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt (CTRL+C)")
        except Exception as exc:
            logger.error("Server error: %s", exc)
            raise
        finally:
            logger.info("Server has shut down.")


def main() -> None:
    config = ServerConfig()
    server = OpalToolsServer(config)
    asyncio.run(server.run())


if __name__ == "__main__":
    main()

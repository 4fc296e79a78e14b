from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SpecFetcherProtocol(Protocol):
    """Protocol defining the interface for spec fetchers.

    Anything with a matching ``fetch`` method can stand in for the HTTP
    fetcher, which keeps the tool pipelines testable without a network.
    """

    def fetch(self, spec_url: str) -> Any:
        """Download and deserialize an OpenAPI/Swagger document.

        Args:
            spec_url: Absolute URL of a JSON or YAML spec
                (e.g., "https://petstore3.swagger.io/api/v3/openapi.json")

        Returns:
            The parsed document, usually a mapping

        Raises:
            SpecFetchError: If the document cannot be downloaded or parsed
        """
        ...

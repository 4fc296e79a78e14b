from surface.models import AuthRequirement
from surface.normalizer import (
    extract_auth_schemes,
    extract_base_urls,
    extract_endpoints,
    extract_matrix_endpoints,
    normalize_surface_map,
)

SHOP_SPEC = {
    "openapi": "3.0.3",
    "info": {"title": "Shop API", "version": "1.2.0"},
    "servers": [{"url": "https://api.shop.test/v1"}, {"description": "sandbox without url"}, "junk"],
    "components": {
        "securitySchemes": {
            "bearerAuth": {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"},
            "apiKey": {"type": "apiKey", "in": "header", "name": "X-Api-Key"},
            "oauth": {"type": "oauth2", "flows": {"implicit": {}, "authorizationCode": {}}},
            "mystery": {},
        }
    },
    "paths": {
        "/customers": {
            "parameters": [{"name": "tenant", "in": "header"}],
            "get": {"description": "List customers\nResults are paginated."},
            "post": {
                "summary": "Create a customer",
                "security": [{"bearerAuth": []}],
                "requestBody": {"content": {}},
                "responses": {"201": {"description": "created"}},
            },
            "head": {"summary": "Check customers"},
        },
        "/customers/{id}": {
            "put": {},
            "patch": "not an operation",
            "delete": None,
        },
        "/broken": "not a path item",
    },
}


def test_extract_endpoints_follows_path_order_then_fixed_method_order() -> None:
    endpoints = extract_endpoints(SHOP_SPEC)

    assert [(endpoint.method, endpoint.path) for endpoint in endpoints] == [
        ("GET", "/customers"),
        ("POST", "/customers"),
        ("PUT", "/customers/{id}"),
    ]


def test_extract_endpoints_purpose_falls_back_to_first_description_line_then_placeholder() -> None:
    get_customers, post_customers, put_customer = extract_endpoints(SHOP_SPEC)

    assert get_customers.purpose == "List customers"
    assert post_customers.purpose == "Create a customer"
    assert put_customer.purpose == "No description"


def test_matrix_endpoints_include_head_and_use_empty_placeholder() -> None:
    endpoints = extract_matrix_endpoints(SHOP_SPEC)

    assert [(endpoint.method, endpoint.path) for endpoint in endpoints] == [
        ("GET", "/customers"),
        ("POST", "/customers"),
        ("HEAD", "/customers"),
        ("PUT", "/customers/{id}"),
    ]
    assert endpoints[-1].purpose == ""


def test_auth_required_is_tri_state() -> None:
    get_customers, post_customers, _ = extract_endpoints(SHOP_SPEC)

    assert post_customers.auth_required is AuthRequirement.REQUIRED
    assert get_customers.auth_required is AuthRequirement.UNKNOWN
    assert post_customers.model_dump()["auth_required"] is True
    assert get_customers.model_dump()["auth_required"] is None


def test_global_security_marks_every_operation_as_requiring_auth() -> None:
    spec = {
        "security": [{"apiKey": []}],
        "paths": {"/orders": {"get": {"summary": "List orders"}, "delete": {"summary": "Drop orders"}}},
    }

    endpoints = extract_endpoints(spec)

    assert [endpoint.auth_required for endpoint in endpoints] == [AuthRequirement.REQUIRED, AuthRequirement.REQUIRED]


def test_empty_security_lists_leave_auth_unknown() -> None:
    spec = {"security": [], "paths": {"/ping": {"get": {"summary": "Ping", "security": []}}}}

    (endpoint,) = extract_endpoints(spec)

    assert endpoint.auth_required is AuthRequirement.UNKNOWN


def test_schema_hints_and_scopes() -> None:
    _, post_customers, put_customer = extract_endpoints(SHOP_SPEC)

    assert post_customers.request_schema_hint == "Has requestBody (see spec)"
    assert post_customers.response_schema_hint == "Has responses (see spec)"
    assert put_customer.request_schema_hint == ""
    assert post_customers.scopes == []


def test_extract_base_urls_drops_entries_without_url() -> None:
    assert extract_base_urls(SHOP_SPEC) == ["https://api.shop.test/v1"]
    assert extract_base_urls({"servers": "nope"}) == []


def test_extract_auth_schemes_defaults_and_sorted_flows() -> None:
    schemes = {scheme.name: scheme for scheme in extract_auth_schemes(SHOP_SPEC)}

    assert list(schemes) == ["bearerAuth", "apiKey", "oauth", "mystery"]
    assert schemes["bearerAuth"].scheme == "bearer"
    assert schemes["bearerAuth"].bearerFormat == "JWT"
    assert schemes["bearerAuth"].location is None
    assert schemes["apiKey"].location == "header"
    assert schemes["oauth"].flows == ["authorizationCode", "implicit"]
    assert schemes["mystery"].type == "unknown"
    assert schemes["mystery"].flows == []


def test_auth_scheme_location_serializes_as_in() -> None:
    (api_key,) = [scheme for scheme in extract_auth_schemes(SHOP_SPEC) if scheme.name == "apiKey"]

    assert api_key.model_dump(by_alias=True)["in"] == "header"


def test_normalize_surface_map_collects_everything() -> None:
    surface_map = normalize_surface_map(SHOP_SPEC)

    assert surface_map.api.title == "Shop API"
    assert surface_map.api.version == "1.2.0"
    assert len(surface_map.endpoints) == 3
    assert len(surface_map.auth.schemes) == 4
    assert surface_map.base_urls == ["https://api.shop.test/v1"]


def test_normalize_surface_map_tolerates_unexpected_shapes() -> None:
    for spec in (None, "just text", [], {"paths": None, "components": "x", "info": 7}):
        surface_map = normalize_surface_map(spec)

        assert surface_map.api.title == "Unknown API"
        assert surface_map.api.version is None
        assert surface_map.endpoints == []
        assert surface_map.auth.schemes == []
        assert surface_map.base_urls == []


def test_oddly_typed_server_and_scheme_fields_are_coerced_or_dropped() -> None:
    spec = {
        "servers": [{"url": 8080}, {"url": ["https://a.test"]}, {"url": "https://b.test"}],
        "components": {
            "securitySchemes": {
                "k": {"type": ["apiKey"], "in": ["header"], "scheme": {"x": 1}, "bearerFormat": 1},
            }
        },
    }

    surface_map = normalize_surface_map(spec)

    assert surface_map.base_urls == ["8080", "https://b.test"]
    (scheme,) = surface_map.auth.schemes
    assert scheme.type == "unknown"
    assert scheme.location is None
    assert scheme.scheme is None
    assert scheme.bearerFormat == "1"

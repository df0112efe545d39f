"""
resource_api

JSON:API style resource framework on FastAPI. Resource providers implement
ICRUD (and optionally IFindAll / IPaginatedFindAll); API mounts them as routes.
"""

from resource_api.api import API
from resource_api.infrastructure.exceptions import ContractViolation, ErrorObject, HTTPError
from resource_api.infrastructure.resource import (
    ICRUD,
    IFindAll,
    IPaginatedFindAll,
    IURLResolver,
    IRequestAwareURLResolver,
    Request,
    StaticURLResolver,
    HostURLResolver,
)
from resource_api.infrastructure.response import (
    IResponder,
    Response,
    Found,
    Created,
    Updated,
    Accepted,
    NoContent,
)

__all__ = [
    "API",
    "ContractViolation",
    "ErrorObject",
    "HTTPError",
    "ICRUD",
    "IFindAll",
    "IPaginatedFindAll",
    "IURLResolver",
    "IRequestAwareURLResolver",
    "Request",
    "StaticURLResolver",
    "HostURLResolver",
    "IResponder",
    "Response",
    "Found",
    "Created",
    "Updated",
    "Accepted",
    "NoContent",
]

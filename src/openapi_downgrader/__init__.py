"""Convert OpenAPI 3.x documents into strict, self-contained Swagger 2.0."""

import logging

logging.getLogger("openapi_downgrader").addHandler(logging.NullHandler())

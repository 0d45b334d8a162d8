"""AWS Lambda handler using Mangum adapter."""

from mangum import Mangum

from beam_verifier.app_setup import add_root_endpoint, setup_app
from beam_verifier.application import create_app
from beam_verifier.core.logging import intercept_standard_logging

intercept_standard_logging()

app = create_app()

# Beam signature gate, same as the uvicorn entry point
setup_app(app)

add_root_endpoint(app)

# API Gateway / Function URL events are translated to ASGI by Mangum
lambda_handler = Mangum(app)

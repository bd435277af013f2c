"""Lambda entry point for the portal HTTP API."""

from mangum import Mangum

from instructor_portal.app import create_app

app = create_app()

# lifespan="off": API Gateway invocations carry no ASGI lifespan events
handler = Mangum(app, lifespan="off")

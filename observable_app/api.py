import structlog
from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST

SUCCESS_PROBABILITY = 0.5

HOME_BODY = "Hello! This is our observable app"
RANDOM_SUCCESS_BODY = "Success!"
RANDOM_FAILURE_BODY = "Random failure!"

router = APIRouter()


def draw_success(random_source) -> bool:
    return random_source.random() < SUCCESS_PROBABILITY


@router.get("/", response_class=PlainTextResponse)
def home(request: Request):
    request.app.state.metrics.requests.increment("home", "success")
    structlog.get_logger(__name__).info("Homepage accessed", endpoint="home")
    return PlainTextResponse(HOME_BODY)


@router.get("/random", response_class=PlainTextResponse)
def random_endpoint(request: Request):
    logger = structlog.get_logger(__name__)
    requests = request.app.state.metrics.requests
    if draw_success(request.app.state.random_source):
        requests.increment("random", "success")
        logger.info("Random endpoint success", endpoint="random")
        return PlainTextResponse(RANDOM_SUCCESS_BODY)

    # simulated failure: reported, never recovered from
    requests.increment("random", "error")
    logger.error("Random endpoint failed", endpoint="random")
    return PlainTextResponse(RANDOM_FAILURE_BODY, status_code=500)


@router.get("/metrics", include_in_schema=False)
def metrics(request: Request):
    return Response(request.app.state.metrics.registry.render(), media_type=CONTENT_TYPE_LATEST)

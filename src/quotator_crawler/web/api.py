from fastapi import APIRouter, Depends, FastAPI, Request

from quotator_crawler import SERVICE_NAME, __version__
from quotator_crawler.core.coordinator import RefreshCoordinator
from quotator_crawler.core.utils import setup_logger

from .schemas import CrawlResponse, HealthResponse, StatusResponse

logger = setup_logger(name="web.api")

router = APIRouter()


def get_coordinator(request: Request) -> RefreshCoordinator:
    return request.app.state.coordinator


@router.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(status="ok", service=SERVICE_NAME, version=__version__)


@router.api_route("/crawl", methods=["GET", "POST"], response_model=CrawlResponse)
def crawl(coordinator: RefreshCoordinator = Depends(get_coordinator)):
    """Start a refresh in the background; an overlapping trigger is dropped."""
    coordinator.trigger_refresh()
    logger.debug("Refresh triggered over HTTP")
    return CrawlResponse(status="ok", message="Crawl started")


@router.get("/status", response_model=StatusResponse, response_model_exclude_unset=True)
def status(coordinator: RefreshCoordinator = Depends(get_coordinator)):
    return StatusResponse(**coordinator.current_status().to_dict())


def create_app(coordinator: RefreshCoordinator) -> FastAPI:
    app = FastAPI(
        title="Quotator Crawler",
        version=__version__,
        description="Refreshes the Istanbul pricing catalog and reports refresh status",
    )
    app.state.coordinator = coordinator
    app.include_router(router)
    return app

from app.api.routes.health import router as health_router
from app.api.routes.sanctions import eu_router, ofac_router

__all__ = ["health_router", "ofac_router", "eu_router"]

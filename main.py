from typing import Optional

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from shared.cache import ViewCache
from shared.logging import configure_logging
from shared.middleware import RouteAccessMiddleware
from shared.settings import RouteAccessMap, load_route_access
from services.school_admin.controllers.academics_service import class_router, subject_router
from services.school_admin.controllers.auth_service import router as auth_router
from services.school_admin.controllers.listing_service import router as listing_router
from services.school_admin.controllers.people_service import student_router, teacher_router
from services.school_admin.controllers.schedule_service import (
    assignment_router,
    exam_router,
    lesson_router,
)

configure_logging()

# Loaded once; the middleware keeps a reference
route_access = load_route_access()


def create_app(access_map: Optional[RouteAccessMap] = None) -> FastAPI:
    app = FastAPI(title="School Admin Backend")
    app.state.view_cache = ViewCache()

    app.add_middleware(RouteAccessMiddleware, access_map=access_map or route_access)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    def health_check():
        return {"status": "School Admin Backend is running"}

    app.include_router(auth_router)
    app.include_router(subject_router)
    app.include_router(class_router)
    app.include_router(teacher_router)
    app.include_router(student_router)
    app.include_router(lesson_router)
    app.include_router(exam_router)
    app.include_router(assignment_router)
    app.include_router(listing_router)
    return app


app = create_app()

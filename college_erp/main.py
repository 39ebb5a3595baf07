import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from college_erp.api.v1.admissions.router import router as admissions_router
from college_erp.api.v1.auth.router import router as auth_router
from college_erp.api.v1.catalog.router import router as catalog_router
from college_erp.api.v1.dashboard.router import router as dashboard_router
from college_erp.api.v1.fees.router import router as fees_router
from college_erp.api.v1.hostel.router import router as hostel_router
from college_erp.api.v1.students.router import router as students_router
from college_erp.core.config import settings
from college_erp.db.seed_demo import seed_demo_data
from college_erp.db.store import Store


def create_app(store: Optional[Store] = None) -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="College ERP Ledger & Occupancy API")

    if store is None:
        store = Store(settings)
        if settings.seed_demo_data:
            seed_demo_data(store)
    app.state.store = store

    # CORS: allow the dashboard front-end to call this API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(auth_router)
    app.include_router(catalog_router)
    app.include_router(students_router)
    app.include_router(admissions_router)
    app.include_router(fees_router)
    app.include_router(hostel_router)
    app.include_router(dashboard_router)

    return app


app = create_app()

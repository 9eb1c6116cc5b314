from __future__ import annotations

import logging
import math
from functools import lru_cache
from typing import Annotated

import numpy as np
import pandas as pd
import uvicorn
from fastapi import Depends, FastAPI, Form, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, RedirectResponse, Response
from starlette.middleware.sessions import SessionMiddleware

from api.schemas import LoginForm, OfficeAuthForm
from core.config import configure_logging, get_config
from core.credentials import CredentialTables, load_credential_tables
from core.errors import DashboardError, InvalidCredentials, NotAuthenticated, TabNotFoundError, UpstreamError
from core.export import XLSX_MEDIA_TYPE, build_workbook, content_disposition, export_filename, zone_export_frame
from core.metrics_finance import RECONCILIATIONS_TAB, WALLETS_TAB, compute_office_wallets, compute_reconciliations
from core.metrics_hiring import (
    HIRING_RESPONSES_TAB,
    NEW_HIRES_TAB,
    compute_hiring_responses,
    compute_new_hires,
    count_new_hires,
)
from core.metrics_inquiry import (
    REJECTED_INQUIRY_TAB,
    UPLOADED_INQUIRY_TAB,
    compute_office_inquiries,
    compute_prep_offices,
    compute_rejected_inquiries,
)
from core.metrics_riders import (
    ORDER_RESPONSES_TAB,
    ROSTER_TAB,
    TARGETS_TAB,
    compute_dashboard,
    compute_order_responses,
    compute_targets,
    compute_zone_list,
)
from core.sessions import SessionStore
from core.sheets import SheetGateway


SESSION_ID_KEY = "sid"

cfg = get_config()
app = FastAPI(title="Zone Supervisor Dashboard", version="3.0.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    SessionMiddleware,
    secret_key=cfg.session_secret,
    max_age=cfg.session_max_age,
    https_only=cfg.session_https_only,
    same_site="lax",
)


def get_gateway() -> SheetGateway:
    return SheetGateway(get_config())


@lru_cache(maxsize=1)
def get_credential_tables() -> CredentialTables:
    return load_credential_tables(get_config())


@lru_cache(maxsize=1)
def get_session_store() -> SessionStore:
    return SessionStore(get_config().session_max_age)


def require_zone(request: Request, store: Annotated[SessionStore, Depends(get_session_store)]) -> str:
    zone = store.get_zone(request.session.get(SESSION_ID_KEY))
    if not zone:
        raise NotAuthenticated()
    return str(zone)


Gateway = Annotated[SheetGateway, Depends(get_gateway)]
Tables = Annotated[CredentialTables, Depends(get_credential_tables)]
Sessions = Annotated[SessionStore, Depends(get_session_store)]
Zone = Annotated[str, Depends(require_zone)]


def _json(data: object, status_code: int = 200) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
            },
        ),
    )


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=303)


@app.exception_handler(NotAuthenticated)
async def not_authenticated(request: Request, exc: NotAuthenticated):
    return _redirect("/")


@app.exception_handler(UpstreamError)
async def upstream_failed(request: Request, exc: UpstreamError):
    logger.exception("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    return _json({"error": exc.user_message, "type": type(exc).__name__}, status_code=502)


@app.exception_handler(DashboardError)
async def dashboard_failed(request: Request, exc: DashboardError):
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return _json({"error": exc.user_message, "type": type(exc).__name__}, status_code=500)


@app.exception_handler(Exception)
async def unhandled(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _json({"error": DashboardError.user_message, "type": "InternalError"}, status_code=500)


@app.get("/")
def login_page(gateway: Gateway):
    doc = gateway.connect()
    return _json(compute_zone_list(gateway.read(doc, ROSTER_TAB)))


@app.post("/login")
def login(request: Request, form: Annotated[LoginForm, Form()], tables: Tables, store: Sessions):
    try:
        zone = tables.login(form.zone, form.password)
    except InvalidCredentials as exc:
        logger.warning("Login rejected for zone %r", form.zone)
        return _json({"zones": tables.zones(), "error": exc.user_message}, status_code=401)
    store.destroy(request.session.get(SESSION_ID_KEY))
    request.session.clear()
    request.session[SESSION_ID_KEY] = store.create(zone)
    logger.info("Zone %r logged in", zone)
    return _redirect("/dashboard")


@app.get("/dashboard")
def dashboard(zone: Zone, gateway: Gateway):
    doc = gateway.connect()
    roster = gateway.read(doc, ROSTER_TAB)
    try:
        new_count = count_new_hires(gateway.read(doc, NEW_HIRES_TAB), zone)
    except TabNotFoundError:
        logger.warning("Tab %r missing, reporting zero new hires", NEW_HIRES_TAB)
        new_count = 0
    return _json(compute_dashboard(roster, zone, new_count=new_count))


@app.get("/uploaded-inquiry")
def uploaded_inquiry(zone: Zone, gateway: Gateway, error: bool = Query(default=False)):
    doc = gateway.connect()
    return _json(compute_prep_offices(gateway.read(doc, UPLOADED_INQUIRY_TAB), zone, error=error))


@app.post("/uploaded-inquiry-auth")
def uploaded_inquiry_auth(zone: Zone, form: Annotated[OfficeAuthForm, Form()], tables: Tables, gateway: Gateway):
    try:
        location = tables.office_auth(form.location, form.password)
    except InvalidCredentials:
        logger.warning("Office gate rejected for %r (zone %r)", form.location, zone)
        return _redirect("/uploaded-inquiry?error=true")
    doc = gateway.connect()
    return _json(compute_office_inquiries(gateway.read(doc, UPLOADED_INQUIRY_TAB), zone, location))


@app.get("/office-wallets")
def office_wallets(zone: Zone, gateway: Gateway):
    doc = gateway.connect()
    return _json(compute_office_wallets(gateway.read(doc, WALLETS_TAB), zone))


@app.get("/reconciliations")
def reconciliations(zone: Zone, gateway: Gateway):
    doc = gateway.connect()
    return _json(compute_reconciliations(gateway.read(doc, RECONCILIATIONS_TAB), zone))


@app.get("/targets")
def targets(zone: Zone, gateway: Gateway):
    doc = gateway.connect()
    target_table = gateway.read(doc, TARGETS_TAB)
    roster = gateway.read(doc, ROSTER_TAB)
    return _json(compute_targets(target_table, zone, roster))


@app.get("/new-riders")
def new_riders(zone: Zone, gateway: Gateway):
    doc = gateway.connect()
    return _json(compute_new_hires(gateway.read(doc, NEW_HIRES_TAB), zone))


@app.get("/order-responses")
def order_responses(zone: Zone, gateway: Gateway):
    doc = gateway.connect()
    return _json(compute_order_responses(gateway.read(doc, ORDER_RESPONSES_TAB), zone))


@app.get("/new-riders-responses")
def new_riders_responses(zone: Zone, gateway: Gateway):
    doc = gateway.connect()
    return _json(compute_hiring_responses(gateway.read(doc, HIRING_RESPONSES_TAB), zone))


@app.get("/rejected-inquiry")
def rejected_inquiry(zone: Zone, gateway: Gateway):
    doc = gateway.connect()
    return _json(compute_rejected_inquiries(gateway.read(doc, REJECTED_INQUIRY_TAB), zone))


@app.get("/download")
def download(zone: Zone, gateway: Gateway):
    doc = gateway.connect()
    frame = zone_export_frame(gateway.read(doc, ROSTER_TAB), zone)
    return Response(
        content=build_workbook(frame),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": content_disposition(export_filename(zone))},
    )


@app.get("/logout")
def logout(request: Request, store: Sessions):
    store.destroy(request.session.get(SESSION_ID_KEY))
    request.session.clear()
    return _redirect("/")


def run() -> None:
    configure_logging(cfg.log_level)
    logger.info("Listening on %s:%s", cfg.host, cfg.port)
    uvicorn.run(app, host=cfg.host, port=cfg.port)


if __name__ == "__main__":
    run()

"""Web interface routes: dashboard, per-link stats page and redirects."""

import os
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Request, Form, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from shortlinks.common.headers import build_base_url, get_path_prefix
from shortlinks.common.url_builder import build_short_url
from shortlinks.database.models import Link
from shortlinks.errors import ShortlinksError

router = APIRouter()

template_dir = os.path.join(os.path.dirname(__file__), "..", "templates")
templates = Jinja2Templates(directory=template_dir)

SORT_FIELDS = ("created", "clicks", "lastClicked")
EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def filter_links(links: List[Link], query: str) -> List[Link]:
    """Keep links whose code or URL contains the query (case-insensitive)."""
    query = (query or "").strip().lower()
    if not query:
        return list(links)
    return [link for link in links if query in link.code.lower() or query in link.url.lower()]


def sort_links(links: List[Link], sort: str = "created", order: str = "desc") -> List[Link]:
    """Sort by creation time, clicks or last click. Never-clicked links sort as oldest."""
    if sort == "clicks":
        key = lambda link: link.clicks
    elif sort == "lastClicked":
        key = lambda link: link.last_clicked or EPOCH
    else:
        key = lambda link: link.created_at
    return sorted(links, key=key, reverse=(order != "asc"))


def _link_urls(request: Request):
    """Public base URL and path prefix for links rendered in this request."""
    config = request.app.state.config
    headers = dict(request.headers)
    base_url = build_base_url(
        headers=headers,
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )
    prefix = get_path_prefix(headers, config.path_prefix)
    return base_url, prefix


def _error_page(request: Request, error: ShortlinksError) -> HTMLResponse:
    _, prefix = _link_urls(request)
    return templates.TemplateResponse(
        request,
        "error.html",
        {"error_message": error.message, "prefix": prefix},
        status_code=error.status_code,
    )


async def _render_dashboard(
    request: Request,
    q: str = "",
    sort: str = "created",
    order: str = "desc",
    error: Optional[ShortlinksError] = None,
    form: Optional[dict] = None,
    created: str = "",
) -> HTMLResponse:
    service = request.app.state.service
    base_url, prefix = _link_urls(request)

    try:
        links = await service.list_links()
    except ShortlinksError as e:
        return _error_page(request, e)

    if sort not in SORT_FIELDS:
        sort = "created"
    order = "asc" if order == "asc" else "desc"
    shown = sort_links(filter_links(links, q), sort, order)

    rows = [
        {
            "link": link,
            "short_url": build_short_url(link.code, base_url, prefix),
        }
        for link in shown
    ]

    # Notice for the link just created by the form, if it still exists
    created_url = None
    if created and any(link.code == created for link in links):
        created_url = build_short_url(created, base_url, prefix)

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "rows": rows,
            "q": q,
            "sort": sort,
            "order": order,
            "prefix": prefix,
            "error_message": error.message if error else None,
            "form": form or {},
            "created_url": created_url,
        },
        status_code=error.status_code if error else status.HTTP_200_OK,
    )


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def dashboard(
    request: Request,
    q: str = "",
    sort: str = "created",
    order: str = "desc",
    created: str = "",
):
    """Serve the dashboard: create form plus a filterable, sortable link table."""
    return await _render_dashboard(request, q=q, sort=sort, order=order, created=created)


@router.post("/create", response_class=HTMLResponse, include_in_schema=False)
async def create_link_web(
    request: Request,
    url: str = Form(""),
    code: str = Form(""),
):
    """Handle the dashboard's create form."""
    service = request.app.state.service
    _, prefix = _link_urls(request)

    try:
        link = await service.create_link(url=url.strip(), code=code.strip() or None)
    except ShortlinksError as e:
        return await _render_dashboard(request, error=e, form={"url": url, "code": code})

    return RedirectResponse(url=f"{prefix}/?created={link.code}", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/code/{code}", response_class=HTMLResponse, include_in_schema=False)
async def link_stats_page(request: Request, code: str):
    """Per-link statistics page."""
    service = request.app.state.service
    base_url, prefix = _link_urls(request)

    try:
        link = await service.get_link(code)
    except ShortlinksError as e:
        return _error_page(request, e)

    return templates.TemplateResponse(
        request,
        "stats.html",
        {
            "link": link,
            "short_url": build_short_url(link.code, base_url, prefix),
            "prefix": prefix,
        },
    )


@router.post("/code/{code}/delete", include_in_schema=False)
async def delete_link_web(request: Request, code: str):
    """Handle the dashboard's delete button."""
    service = request.app.state.service
    _, prefix = _link_urls(request)

    try:
        await service.delete_link(code)
    except ShortlinksError as e:
        return _error_page(request, e)

    return RedirectResponse(url=f"{prefix}/", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/{code}", include_in_schema=False)
async def redirect_to_url(request: Request, code: str):
    """Redirect to the link's URL, counting the visit."""
    service = request.app.state.service

    # Unknown codes raise LinkNotFoundError, answered as JSON 404 by the app
    url = await service.resolve(code)

    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)

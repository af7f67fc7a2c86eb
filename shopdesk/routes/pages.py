"""
ShopDesk Backend: HTML Entry Page
=================================

What:  Serves the home page for GET /.
How:   Reads `<static_dir>/<home_page>` from the app's settings. Other files
       in the static directory are served by the StaticFiles mount in main.py.
"""

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse

from shopdesk.exceptions import NotFoundError

router = APIRouter(tags=["Pages"])


@router.get("/", response_class=FileResponse, include_in_schema=False)
async def home(request: Request) -> FileResponse:
    settings = request.app.state.settings
    page = Path(settings.static_dir) / settings.home_page
    if not page.is_file():
        raise NotFoundError(resource="page", resource_id=settings.home_page)
    return FileResponse(path=str(page), media_type="text/html")

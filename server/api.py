"""FastAPI server exposing the closet catalog and color recommendations."""

import contextlib
from typing import AsyncIterator, List, Optional

from fastapi import FastAPI, HTTPException, Query, Request

from closet_app.app import ClosetApp
from closet_app.config import ClosetConfig
from logic.validation import ItemCreateInput, ItemUpdateInput
from models.color_theory import hex_to_hsl
from tools.closet_tools import ClosetTools


def _tools(request: Request) -> ClosetTools:
    return request.app.state.closet.tools


@contextlib.asynccontextmanager
async def _lifespan(api: FastAPI) -> AsyncIterator[None]:
    if api.state.closet is None:
        api.state.closet = ClosetApp()
    yield


def create_app(closet_app: ClosetApp | None = None) -> FastAPI:
    """Build the FastAPI application around a :class:`ClosetApp`.

    Without an explicit app one is built from the environment at startup.
    """

    api = FastAPI(title="Closet Harmony", version="0.1.0", lifespan=_lifespan)
    api.state.closet = closet_app

    @api.get("/healthz")
    async def healthcheck(request: Request) -> dict:
        """Lightweight readiness probe."""

        config = request.app.state.closet.config
        return {
            "status": "ok",
            "service": "closet-harmony",
            "environment": config.environment or "local",
        }

    @api.get("/colors/hsl")
    async def color_to_hsl(
        hex_color: str = Query(..., alias="hex", description="Hex triplet such as #FF8800"),
    ) -> dict:
        """Convert a hex color; malformed input maps to zeros."""

        hsl = hex_to_hsl(hex_color)
        return {"hex": hex_color, "h": hsl.h, "s": hsl.s, "l": hsl.l}

    @api.post("/users/{user_id}/items", status_code=201)
    async def add_item(user_id: str, payload: ItemCreateInput, request: Request) -> dict:
        try:
            return _tools(request).add_item(user_id=user_id, item_data=payload.model_dump())
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    @api.get("/users/{user_id}/items")
    async def list_items(user_id: str, request: Request, category: Optional[str] = None) -> List[dict]:
        """List a closet newest first, optionally narrowed to one category."""

        return _tools(request).filter_items(user_id=user_id, category=category)

    @api.get("/users/{user_id}/items/{item_id}")
    async def get_item(user_id: str, item_id: str, request: Request) -> dict:
        item = _tools(request).get_item(user_id=user_id, item_id=item_id)
        if item is None:
            raise HTTPException(status_code=404, detail="item not found")
        return item

    @api.patch("/users/{user_id}/items/{item_id}")
    async def update_item(user_id: str, item_id: str, payload: ItemUpdateInput, request: Request) -> dict:
        try:
            item = _tools(request).update_item(
                user_id=user_id, item_id=item_id, updates=payload.model_dump(exclude_unset=True)
            )
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        if item is None:
            raise HTTPException(status_code=404, detail="item not found")
        return item

    @api.delete("/users/{user_id}/items/{item_id}")
    async def delete_item(user_id: str, item_id: str, request: Request) -> dict:
        if not _tools(request).delete_item(user_id=user_id, item_id=item_id):
            raise HTTPException(status_code=404, detail="item not found")
        return {"deleted": True, "id": item_id}

    @api.get("/users/{user_id}/items/{item_id}/recommendations")
    async def recommendations(user_id: str, item_id: str, request: Request) -> dict:
        """Return complementary, analogous and monochromatic matches for an item."""

        response = _tools(request).recommend_for_item(user_id=user_id, item_id=item_id)
        if response.get("status") != "ok":
            raise HTTPException(status_code=404, detail=response.get("message", "recommendation failed"))
        return response

    return api


app = create_app()


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


if __name__ == "__main__":
    import uvicorn

    config = ClosetConfig.from_env()
    uvicorn.run("server.api:app", host=config.host, port=config.port, reload=False)

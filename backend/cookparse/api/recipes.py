import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from ..core.config import Settings, get_settings
from ..core.exceptions import SourceTooLargeError
from ..models.recipe import ParserOptions, Recipe
from ..services.recipe_parser import RecipeParser

log = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1")


class ParseRequest(BaseModel):
    source: str
    options: Optional[ParserOptions] = None


def check_source_length(source: str, limit: int) -> None:
    if len(source) > limit:
        raise SourceTooLargeError(len(source), limit)


@router.post(
    "/recipes/parse",
    response_model=Recipe,
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
async def parse_recipe(request: ParseRequest, settings: Settings = Depends(get_settings)) -> Recipe:
    """Parse a Cooklang recipe into steps, ingredients, cookware, metadata and shopping lists"""
    try:
        check_source_length(request.source, settings.max_source_length)
    except SourceTooLargeError as exc:
        log.warning(f"⚠️ Rejected recipe: {exc}")
        raise HTTPException(status_code=413, detail=str(exc))

    log.info(f"📝 Parsing recipe: {len(request.source)} characters")
    parser = RecipeParser(request.options or settings.parser_options())
    recipe = await run_in_threadpool(parser.parse, request.source)
    log.info(f"✅ Parsed {len(recipe.steps)} steps, {len(recipe.ingredients)} ingredients")
    return recipe

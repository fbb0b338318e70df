# -*- coding: utf-8 -*-
# @File: category_router.py

from __future__ import annotations

from typing import Annotated, List

from fastapi import APIRouter, Depends

from app.deps import get_store
from domains.crowdfunding_domain import Category
from domains.error_domain import NotFoundError
from infrastructures.store.entity_store import EntityStore

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=List[Category])
async def list_categories(store: Annotated[EntityStore, Depends(get_store)]) -> List[Category]:
    return store.get_categories()


@router.get("/{slug}", response_model=Category)
async def get_category(slug: str, store: Annotated[EntityStore, Depends(get_store)]) -> Category:
    category = store.get_category_by_slug(slug)
    if category is None:
        raise NotFoundError(message="Category not found", details={"slug": slug})
    return category

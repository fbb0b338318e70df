# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: DomainModel 基类与公共工具（统一配置/时间戳）

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DomainModel(BaseModel):
    # JSON 对外使用 camelCase，Python 内部保持 snake_case
    model_config = ConfigDict(
        from_attributes=True,
        protected_namespaces=(),
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_dict(self, *, exclude_none: bool = False) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=exclude_none)

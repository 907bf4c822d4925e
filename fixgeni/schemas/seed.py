from typing import Optional, List
from fixgeni.schemas.base import CamelModel
from fixgeni.schemas.category import CategoryOut

class SeedStatusOut(CamelModel):
    category_count: int
    latest: Optional[CategoryOut] = None

class SeedErrorOut(CamelModel):
    entry: str
    kind: str
    missing: str

class SeedRunOut(CamelModel):
    ok: bool = True
    created: int
    updated: int
    unchanged: int
    errors: List[SeedErrorOut] = []

class MaintenanceOut(CamelModel):
    ok: bool = True
    operation: str
    result: dict

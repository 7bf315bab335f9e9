from __future__ import annotations

from typing import List

from pydantic import BaseModel


class DeclarationDTO(BaseModel):
    id: int
    alias: str
    type: str
    digest: str
    contexts: List[str]
    exported: bool = False
    unresolved: bool = False


class DocumentDTO(BaseModel):
    source: str
    stub: str
    type: str


class UnresolvedArrayDTO(BaseModel):
    alias: str
    derived_from: str
    contexts: List[str] = []


class RunReportDTO(BaseModel):
    common_file: str
    conflict_policy: str
    declarations: List[DeclarationDTO]
    documents: List[DocumentDTO]
    unresolved: List[UnresolvedArrayDTO] = []

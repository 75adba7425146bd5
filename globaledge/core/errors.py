"""Domain errors and lookup helpers shared by the API routers"""
from fastapi import HTTPException
from typing import Optional


class GlobalEdgeError(Exception):
    pass


class DraftValidationError(GlobalEdgeError):

    def __init__(self, problems: list):
        self.problems = problems
        super().__init__("; ".join(problems))


class DraftNotFoundError(GlobalEdgeError):

    def __init__(self, draft_id: str):
        self.draft_id = draft_id
        super().__init__(f"Draft {draft_id} not found")


class StorageUnavailableError(GlobalEdgeError):
    pass


def check_not_found(item, resource_name: str = "Resource", resource_id: Optional[str] = None) -> None:

    if not item:
        if resource_id:
            raise HTTPException(
                status_code=404,
                detail=f"{resource_name} {resource_id} not found"
            )
        raise HTTPException(status_code=404, detail=f"{resource_name} not found")

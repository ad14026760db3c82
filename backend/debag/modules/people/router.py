# modules/people/router.py
"""
Roster endpoints: active listing and quick-add.

Rule: zero db.execute here. Everything goes through PeopleService.
"""
from fastapi import APIRouter, HTTPException, status
from typing import List

from debag.shared.deps import DbDep
from debag.shared.schemas import ERROR_RESPONSES
from debag.modules.people.service import PeopleService, EMPLOYEE_CODE_EXISTS
from debag.modules.people.schemas import PersonCreateIn, PersonOut

router = APIRouter(
    prefix="/people",
    tags=["People"],
    responses=ERROR_RESPONSES,
)
service = PeopleService()


@router.get(
    "",
    response_model=List[PersonOut],
    summary="Active people",
)
async def list_people(db: DbDep):
    """Active people, in creation order."""
    return await service.list_active(db)


@router.post(
    "",
    response_model=PersonOut,
    status_code=status.HTTP_201_CREATED,
    summary="Quick-add a person",
)
async def create_person(payload: PersonCreateIn, db: DbDep):
    """
    Either name or employeeCode is required.
    A duplicate employeeCode → 409.
    """
    try:
        return await service.create(db, payload)
    except ValueError as e:
        if str(e) == EMPLOYEE_CODE_EXISTS:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Employee code already exists."
            )
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

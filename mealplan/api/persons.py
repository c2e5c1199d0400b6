"""Person API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from mealplan.database import get_db
from mealplan.models.person import Person
from mealplan.schemas.person import PersonCreate, PersonResponse, PersonUpdate

router = APIRouter(prefix="/api/v1/persons", tags=["persons"])


def get_person(db: Session, person_id: int) -> Person:
    """Get a person or raise 404."""
    person = db.query(Person).filter(Person.id == person_id).first()
    if not person:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Person not found")
    return person


@router.get("", response_model=list[PersonResponse])
async def list_persons(db: Annotated[Session, Depends(get_db)]):
    """List persons and their daily targets."""
    return db.query(Person).order_by(Person.name).all()


@router.post("", response_model=PersonResponse, status_code=status.HTTP_201_CREATED)
async def create_person(data: PersonCreate, db: Annotated[Session, Depends(get_db)]):
    """Create a person."""
    person = Person(**data.model_dump())
    db.add(person)
    db.commit()
    db.refresh(person)
    return person


@router.get("/{person_id}", response_model=PersonResponse)
async def read_person(person_id: int, db: Annotated[Session, Depends(get_db)]):
    """Get a person."""
    return get_person(db, person_id)


@router.put("/{person_id}", response_model=PersonResponse)
async def update_person(
    person_id: int, data: PersonUpdate, db: Annotated[Session, Depends(get_db)]
):
    """Update a person's name or targets."""
    person = get_person(db, person_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(person, field, value)
    db.commit()
    db.refresh(person)
    return person


@router.delete("/{person_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_person(person_id: int, db: Annotated[Session, Depends(get_db)]):
    """Delete a person."""
    db.delete(get_person(db, person_id))
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)

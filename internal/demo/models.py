"""
Demo models: people records stored in the map cache
"""

import datetime
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Callable, Optional

import lib.utils as utils

AgeCalculator = Callable[[datetime.date], int]


class Gender(StrEnum):
    """Gender of a person"""

    FEMALE = "F"
    MALE = "M"


@dataclass
class Person:
    """Person record, keyed by id in the cache"""

    id: int
    firstName: str
    lastName: str
    birthDate: datetime.date
    gender: Gender
    ageCalculator: AgeCalculator = field(default=utils.getAgeInYears, repr=False, compare=False)

    @property
    def age(self) -> int:
        """Age computed from birth date by ageCalculator"""
        return self.ageCalculator(self.birthDate)

    def describe(self) -> str:
        return f"{self.id} -> {self.firstName} {self.lastName} age({self.age}) gender({self.gender})"


class People(list):
    """List of Person objects, used as typed container for cache sub-lists"""

    def describe(self) -> str:
        return "\n".join(person.describe() for person in self)


def buildPerson(personId: int, startYear: int = 1995, ageCalculator: Optional[AgeCalculator] = None) -> Person:
    """
    Build a single person, born ``personId`` days after Feb 1st of ``startYear``.

    Odd ids are women, even ids are men.
    """
    birthDate = datetime.date(startYear, 2, 1) + datetime.timedelta(days=personId)
    person = Person(
        id=personId,
        firstName=f"FirstName-{personId}",
        lastName=f"LastName-{personId}",
        birthDate=birthDate,
        gender=Gender.FEMALE if personId % 2 else Gender.MALE,
    )
    if ageCalculator is not None:
        person.ageCalculator = ageCalculator
    return person


def buildPeople(count: int, startYear: int = 1995, ageCalculator: Optional[AgeCalculator] = None) -> People:
    """
    Build ``count`` people with ids 1..count.

    Person with id N is born on Feb 1st of ``startYear + N - 1``, so each
    next person is one year younger.
    """
    people = People()
    for personId in range(1, count + 1):
        person = buildPerson(personId, startYear, ageCalculator)
        person.birthDate = datetime.date(startYear + personId - 1, 2, 1)
        people.append(person)
    return people

"""
Demo runner: walks through the MapCache lookup family on people records, dood!
"""

import datetime
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import lib.utils as utils
from lib.map_cache import AttributeKeyMapper, MapCache

from .models import AgeCalculator, Gender, People, Person, buildPeople, buildPerson

logger = logging.getLogger(__name__)


@dataclass
class DemoReport:
    """Results of every demo step"""

    people: People
    byId: Optional[Person]
    byAge: Optional[Person]
    defaulted: Person
    loadedOnMiss: Optional[Person]
    added: Person
    women: People
    finalSize: int


class DemoRunner:
    """
    Runs the people cache demo.

    Config keys (all optional, ``[demo]`` section of config.toml):
        people: Number of people to load (default 20)
        start-year: Birth year of person with id 1 (default 1995)
        lookup-id: Id to get directly (default 17)
        lookup-age: Age to search for (default 20)
        default-id: Missing id to get with a default value (default 21)
        loader-id: Missing id to load on miss (default 22)
        put-id: Id of person added at the end (default 23)
    """

    def __init__(self, config: Dict[str, Any], today: Optional[datetime.date] = None):
        self.config = config
        self.peopleCount = int(config.get("people", 20))
        self.startYear = int(config.get("start-year", 1995))
        self.lookupId = int(config.get("lookup-id", 17))
        self.lookupAge = int(config.get("lookup-age", 20))
        self.defaultId = int(config.get("default-id", 21))
        self.loaderId = int(config.get("loader-id", 22))
        self.putId = int(config.get("put-id", 23))

        self.ageCalculator: AgeCalculator = lambda birthDate: utils.getAgeInYears(birthDate, today)
        self.cache = MapCache[int, Person]()
        # Person id is the key inside the cache
        self.cache.setKeyMapper(AttributeKeyMapper("id"))

    def _loadPerson(self, personId: int) -> Person:
        # Stands for a database lookup
        logger.debug(f"Loading person {personId} on cache miss, dood!")
        return buildPerson(personId, self.startYear, self.ageCalculator)

    def run(self) -> DemoReport:
        """Run all demo steps and return their results"""
        people = buildPeople(self.peopleCount, self.startYear, self.ageCalculator)

        self.cache.putAll(people)
        logger.info(f"Added {self.peopleCount} people to the cache:\n{People(self.cache.values()).describe()}")

        byId = self.cache.get(self.lookupId)
        logger.info(f"Person with id {self.lookupId}: {byId.describe() if byId else None}")

        byAge = self.cache.getBy(lambda person: person.age == self.lookupAge)
        logger.info(f"Person aged {self.lookupAge}: {byAge.describe() if byAge else None}")

        defaultPerson = buildPerson(self.defaultId, self.startYear, self.ageCalculator)
        defaulted = self.cache.getOrDefault(self.defaultId, defaultPerson)
        logger.info(f"Person with id {self.defaultId} (default value): {defaulted.describe()}")

        loadedOnMiss = self.cache.getOrElse(self.loaderId, self._loadPerson)
        logger.info(f"Person with id {self.loaderId} (loaded): {loadedOnMiss.describe() if loadedOnMiss else None}")

        added = buildPerson(self.putId, self.startYear, self.ageCalculator)
        self.cache.put(added)
        logger.info(f"Person with id {self.putId} added: {added.describe()}")

        women = self.cache.subListInto(lambda person: person.gender == Gender.FEMALE, People)
        logger.info(f"Women in the cache:\n{women.describe()}")

        return DemoReport(
            people=people,
            byId=byId,
            byAge=byAge,
            defaulted=defaulted,
            loadedOnMiss=loadedOnMiss,
            added=added,
            women=women,
            finalSize=self.cache.size(),
        )

import logging
from typing import List

from .models import Tournament, Team, Message
from .store import DocumentStore

logger = logging.getLogger(__name__)


SAMPLE_TOURNAMENTS = [
    {'name': 'Global Smash Battle', 'date': '2025-04-15', 'status': 'Active', 'prizePool': '$10,000'},
    {'name': 'Cyber Arena Cup', 'date': '2025-05-20', 'status': 'Upcoming', 'prizePool': '$5,000'},
]

SAMPLE_TEAMS = [
    {'name': 'Fire Falcons', 'elo': 1800, 'members': ['Player1', 'Player2']},
    {'name': 'Shadow Blades', 'elo': 1650, 'members': ['Player3', 'Player4']},
]

SAMPLE_MESSAGES = [
    {'user': 'Organizer', 'message': 'Tournament registration opens tomorrow!'},
    {'user': 'Player1', 'message': 'Ready for the match!'},
]


def seed_collections(store: DocumentStore) -> List[str]:
    """
    Insert the sample documents into every empty collection.
    
    Collections that already hold documents are left alone, so running this
    on each start never duplicates the samples.
    
    Returns:
        Table names of the collections that were seeded
    """
    seeded = []
    for model, docs in (
        (Tournament, SAMPLE_TOURNAMENTS),
        (Team, SAMPLE_TEAMS),
        (Message, SAMPLE_MESSAGES),
    ):
        if store.count(model) == 0:
            store.insert_many(model, docs)
            seeded.append(model.__tablename__)
            logger.info(f"Seeded {len(docs)} {model.__tablename__}")
        else:
            logger.debug(f"Skipping seed for {model.__tablename__}, collection not empty")
    return seeded

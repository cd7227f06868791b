"""
The feed engine: post store, interaction store and feed assembler sharing
one injected session.
"""
from sqlalchemy.orm import Session

from .feed import FeedAssembler
from .interactions import InteractionStore
from .posts import PostStore


class FeedEngine:

    def __init__(self, db: Session):
        self.db = db
        self.posts = PostStore(db)
        self.interactions = InteractionStore(db)
        self.feed = FeedAssembler(db)

from abc import ABC, abstractmethod


class SourceStrategy(ABC):
    @abstractmethod
    def get_sources(self, listing_url: str = None) -> list:
        pass

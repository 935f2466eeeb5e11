from abc import ABC, abstractmethod


class ParseStrategy(ABC):
    @abstractmethod
    def parse(self, raw_data: dict):
        pass

import importlib
import json
import logging
import os


class StrategyFactory:
    def __init__(self, mapping_path: str = None):
        self.mapping = self.get_mapping_file(mapping_path)
        if not self.mapping or not self.mapping.get('scrapers'):
            raise ValueError(f'No mapping found')

    def get_strategy(self, task_type: str, name: str, **kwargs):
        return self._load_strategy(task_type, name, **kwargs)

    def get_strategy_name(self, website: str):
        for scraper in self.mapping['scrapers']:
            if scraper['website'] == website:
                strategy_name = scraper['name']
                return strategy_name

    def get_scraper_config(self, name: str = None) -> dict:
        """
        :param name: scraper name, defaults to the first scraper in the mapping
        :return: the mapping entry of the scraper
        """
        if name is None:
            return self.mapping['scrapers'][0]

        for scraper in self.mapping['scrapers']:
            if scraper['name'] == name:
                return scraper

        raise KeyError(f'Scraper {name} is not in the mapping')

    @staticmethod
    def get_mapping_file(mapping_path: str = None):
        if mapping_path is None:
            current_dir = os.path.dirname(os.path.abspath(__file__))
            root_dir = os.path.join(current_dir, '..')
            mapping_path = os.path.join(root_dir, 'mapping.json')

        with open(mapping_path, 'r') as file:
            mapping = json.load(file)

        return mapping

    @staticmethod
    def _load_strategy(module, strategy_name, **kwargs):
        sub_module = importlib.import_module(f'planning_scraper.strategies.{module}.{strategy_name.lower()}')

        class_name = ''.join(word.title() for word in strategy_name.split('_'))
        class_name = f'{class_name}{module.title()}Strategy'
        strategy_class = getattr(sub_module, class_name)

        logging.info(f'Loaded strategy: {class_name}')
        return strategy_class(**kwargs)

import re
from urllib.parse import urljoin

from bs4 import BeautifulSoup


def get_tag_attribute(tag, attribute: str):
    if tag and tag.has_attr(attribute):
        return tag[attribute]
    else:
        return None


def get_tag_text(tag) -> str:
    """
    :param tag: BeautifulSoup tag
    :return: the tag text with runs of whitespace collapsed to one space
    """
    if not tag:
        return ''

    return re.sub(r'\s+', ' ', tag.get_text()).strip()


def get_absolute_href(tag, base_url: str):
    """
    :param tag: BeautifulSoup tag
    :param base_url: URL the href is relative to
    :return: the href of the tag resolved against base_url, or None if it has none
    """
    href = get_tag_attribute(tag, 'href')
    if not href or not href.strip():
        return None

    return urljoin(base_url, href.strip())


def make_soup(raw_html: str) -> BeautifulSoup:
    return BeautifulSoup(raw_html, 'lxml')

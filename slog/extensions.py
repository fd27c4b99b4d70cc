from __future__ import annotations

import xml.etree.ElementTree as etree

from markdown.extensions import Extension
from markdown.inlinepatterns import InlineProcessor, SimpleTagInlineProcessor
from markdown.util import AtomicString

RE_STRIKETHROUGH = r"(~{2})(?!~)(.+?)(?<!~)\1"
RE_BARE_URL = r"(?<![\w\"'=/<])(?P<url>(?:https?|ftp)://[^\s<>\"']*[^\s<>\"'.,;:!?)\]])"


class AutolinkProcessor(InlineProcessor):
    # Text inside an existing link is left alone.
    ANCESTOR_EXCLUDES = ("a",)

    def handleMatch(self, m, data):
        url = m.group("url")
        el = etree.Element("a")
        el.set("href", url)
        el.text = AtomicString(url)
        return el, m.start(0), m.end(0)


class StrikethroughExtension(Extension):
    def extendMarkdown(self, md):
        md.inlinePatterns.register(
            SimpleTagInlineProcessor(RE_STRIKETHROUGH, "del"),
            "strikethrough",
            55,
        )


class AutolinkExtension(Extension):
    def extendMarkdown(self, md):
        md.inlinePatterns.register(
            AutolinkProcessor(RE_BARE_URL, md),
            "bare_autolink",
            5,
        )

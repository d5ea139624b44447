"""
Cooklang parser – comment stripping, shopping list extraction, then one
token scan per line.
"""

import logging
import re
from typing import Dict, List, Optional, Tuple

from ..core.exceptions import GrammarError
from ..models.recipe import (
    Cookware,
    Ingredient,
    Item,
    ParserOptions,
    Recipe,
    Step,
    Text,
    Timer,
)
from .quantity import parse_quantity, parse_units
from .tokens import (
    BLOCK_COMMENT_CLOSE,
    BLOCK_COMMENT_OPEN,
    COMMENT,
    SHOPPING_LIST,
    TOKENS,
    TokenKind,
)

log = logging.getLogger(__name__)

DEFAULT_UNITS = ""

_LINE_BREAK = re.compile(r"\r?\n")


def strip_comments(source: str) -> str:
    """Drop ``--`` comments and replace each ``[- ... -]`` block, with its surrounding whitespace, by a space."""
    source = COMMENT.sub("", source)

    pieces: List[str] = []
    pos = 0
    while True:
        opening = BLOCK_COMMENT_OPEN.search(source, pos)
        if opening is None:
            break
        closing = BLOCK_COMMENT_CLOSE.search(source, opening.end())
        if closing is None:
            # no later block can close either
            break
        pieces.append(source[pos:opening.start()])
        pieces.append(" ")
        pos = closing.end()

    pieces.append(source[pos:])
    return "".join(pieces)


def parse_shopping_list_category(items: str) -> List[Item]:
    entries: List[Item] = []
    for line in items.split("\n"):
        line = line.strip()
        if not line:
            continue
        name, _, synonym = line.partition("|")
        entries.append(Item(name=name.strip(), synonym=synonym.strip()))
    return entries


def extract_shopping_lists(source: str) -> Tuple[str, Dict[str, List[Item]]]:
    """
    Pull every shopping list block out of ``source``.

    Returns the remaining text with each block replaced by a single newline,
    and the categories found. A repeated category replaces the earlier one.
    """
    shopping_list: Dict[str, List[Item]] = {}
    pieces: List[str] = []
    kept_from = 0
    for match in SHOPPING_LIST.finditer(source):
        category = match.group("category").strip()
        if not category:
            continue

        shopping_list[category] = parse_shopping_list_category(match.group("items"))
        log.debug(f"Extracted shopping list '{category}' ({len(shopping_list[category])} items)")

        pieces.append(source[kept_from:match.start()])
        pieces.append("\n")
        kept_from = match.end()

    pieces.append(source[kept_from:])
    return "".join(pieces), shopping_list


def split_lines(source: str) -> List[str]:
    return [line for line in _LINE_BREAK.split(source) if line.strip()]


class RecipeParser:
    def __init__(self, options: Optional[ParserOptions] = None):
        self.options = options or ParserOptions()

    def parse(self, source: str) -> Recipe:
        ingredients: List[Ingredient] = []
        cookwares: List[Cookware] = []
        metadata: Dict[str, str] = {}
        steps: List[Step] = []

        source = strip_comments(source)
        source, shopping_list = extract_shopping_lists(source)

        step_number = 0
        for line in split_lines(source):
            step = self._scan_line(line, step_number, metadata)
            if not step:
                continue

            for item in step:
                if isinstance(item, Ingredient):
                    ingredients.append(item)
                elif isinstance(item, Cookware):
                    cookwares.append(item)

            steps.append(step)
            step_number += 1

        log.debug(
            f"Parsed {len(steps)} steps, {len(ingredients)} ingredients, "
            f"{len(cookwares)} cookwares, {len(metadata)} metadata keys"
        )
        return Recipe(
            ingredients=ingredients,
            cookwares=cookwares,
            metadata=metadata,
            steps=steps,
            shopping_list=shopping_list,
        )

    def _scan_line(self, line: str, step_number: int, metadata: Dict[str, str]) -> Step:
        """Tokenize one line. A metadata line records into ``metadata`` and yields no items."""
        step: Step = []
        pos = 0
        for match in TOKENS.finditer(line):
            form = match.lastgroup
            if form == TokenKind.METADATA.value:
                metadata[match.group("meta_key").strip()] = match.group("meta_value").strip()
                return []

            if pos < match.start():
                step.append(Text(value=line[pos:match.start()]))

            build = self._builders.get(form)
            if build is None:
                raise GrammarError(str(form))
            step.append(build(self, match, step_number))

            pos = match.end()

        if pos < len(line):
            step.append(Text(value=line[pos:]))

        return step

    def _step(self, step_number: int) -> Optional[int]:
        return step_number if self.options.include_step_number else None

    def _single_word_ingredient(self, match: re.Match, step_number: int) -> Ingredient:
        return Ingredient(
            name=match.group("si_name"),
            quantity=self.options.default_ingredient_amount,
            units=DEFAULT_UNITS,
            step=self._step(step_number),
        )

    def _multiword_ingredient(self, match: re.Match, step_number: int) -> Ingredient:
        quantity = parse_quantity(match.group("mi_quantity"))
        units = parse_units(match.group("mi_units"))
        return Ingredient(
            name=match.group("mi_name").strip(),
            quantity=self.options.default_ingredient_amount if quantity is None else quantity,
            units=DEFAULT_UNITS if units is None else units,
            preparation=match.group("mi_preparation") or None,
            step=self._step(step_number),
        )

    def _single_word_cookware(self, match: re.Match, step_number: int) -> Cookware:
        return Cookware(
            name=match.group("sc_name"),
            quantity=self.options.default_cookware_amount,
            step=self._step(step_number),
        )

    def _multiword_cookware(self, match: re.Match, step_number: int) -> Cookware:
        quantity = parse_quantity(match.group("mc_quantity"))
        return Cookware(
            name=match.group("mc_name").strip(),
            quantity=self.options.default_cookware_amount if quantity is None else quantity,
            step=self._step(step_number),
        )

    def _timer(self, match: re.Match, step_number: int):
        # ~name{} and ~{%units} carry no duration and stay as text
        if not match.group("timer_quantity").strip():
            return Text(value=match.group(0))

        quantity = parse_quantity(match.group("timer_quantity"))
        units = parse_units(match.group("timer_units"))
        return Timer(
            name=match.group("timer_name").strip(),
            quantity=0 if quantity is None else quantity,
            units=DEFAULT_UNITS if units is None else units,
        )

    _builders = {
        TokenKind.SINGLE_WORD_INGREDIENT.value: _single_word_ingredient,
        TokenKind.MULTIWORD_INGREDIENT.value: _multiword_ingredient,
        TokenKind.SINGLE_WORD_COOKWARE.value: _single_word_cookware,
        TokenKind.MULTIWORD_COOKWARE.value: _multiword_cookware,
        TokenKind.TIMER.value: _timer,
    }


def parse(source: str, options: Optional[ParserOptions] = None) -> Recipe:
    return RecipeParser(options).parse(source)

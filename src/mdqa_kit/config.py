# src/mdqa_kit/config.py

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class ExtractionConfig(BaseModel):
    """Settings shared by the loader, extractor and index builder.

    Immutable. Defaults match Russian/English interview-notes conventions.
    """

    extensions: tuple[str, ...] = (".md", ".markdown")
    encoding: str = "utf-8"

    # Words that, followed by a number, mark a question heading ("Вопрос 3")
    question_markers: tuple[str, ...] = ("вопрос", "question", "q")
    follow_up_markers: tuple[str, ...] = (
        "каверзные вопросы",
        "каверзный вопрос",
        "дополнительные вопросы",
        "уточняющие вопросы",
        "follow-up questions",
        "follow up questions",
        "tricky questions",
    )
    answer_labels: tuple[str, ...] = (
        "ответ",
        "короткий ответ",
        "краткий ответ",
        "ответ на собеседовании",
        "answer",
        "short answer",
        "interview answer",
    )

    min_token_length: int = Field(default=2, ge=1)
    index_body: bool = False
    skip_unreadable: bool = True

    class Config:
        extra = "forbid"
        frozen = True


def load_config(path: str | Path) -> ExtractionConfig:
    """Load an ExtractionConfig from a YAML file. An empty file gives defaults."""
    path = Path(path)
    logger.info("Loading extraction config from %s", path)
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file '{path}' must contain a mapping")
    return ExtractionConfig(**data)

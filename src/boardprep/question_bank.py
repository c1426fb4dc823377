import glob
import logging
import os
from typing import Dict, List, Optional

import pandas as pd
from pydantic import ValidationError

from . import sample_bank
from .models import Question, QuizCategory

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = {"id", "question_text", "options", "correct_answer_index"}
OPTION_SEPARATOR = "|"


# --- Service Layer: Question Bank ---
class QuestionBank:
    """Loads question sets from CSV files, one file per category."""

    def __init__(self, directory: str):
        self.directory = directory
        self.categories: Dict[str, QuizCategory] = {}
        self.questions: Dict[str, List[Question]] = {}
        self._by_id: Dict[str, Question] = {}
        self.load_all()

    def load_all(self):
        self.categories = {}
        self.questions = {}
        self._by_id = {}

        if os.path.isdir(self.directory):
            csv_files = sorted(glob.glob(os.path.join(self.directory, "*.csv")))
            for file_path in csv_files:
                self._load_file(file_path)
        else:
            logger.warning(f"Question directory {self.directory} does not exist.")

        if not self.questions:
            logger.warning("No question files loaded. Using the built-in sample bank.")
            self._load_sample()

    def _load_file(self, file_path: str):
        slug = os.path.splitext(os.path.basename(file_path))[0]
        try:
            df = pd.read_csv(file_path, encoding="utf-8", dtype=str, keep_default_na=False)
        except Exception as e:
            logger.error(f"Failed to load {file_path}: {e}")
            return

        missing = REQUIRED_COLUMNS - set(df.columns)
        if missing:
            logger.error(f"Skipping {slug}: missing columns {sorted(missing)}.")
            return

        loaded = []
        for row in df.to_dict("records"):
            try:
                question = Question(
                    id=row["id"].strip(),
                    question_text=row["question_text"].strip(),
                    options=[o.strip() for o in row["options"].split(OPTION_SEPARATOR)],
                    correct_answer_index=int(row["correct_answer_index"]),
                    explanation=row.get("explanation", "").strip(),
                    category=slug,
                    image_url=row.get("image_url", "").strip() or None,
                )
            except (ValueError, ValidationError) as e:
                logger.error(f"Skipping row {row.get('id')!r} in {slug}: {e}")
                continue
            if question.id in self._by_id:
                logger.error(f"Skipping duplicate question id {question.id!r} in {slug}.")
                continue
            self._by_id[question.id] = question
            loaded.append(question)

        if loaded:
            self._add_category(slug, loaded)
            logger.info(f"Loaded {len(loaded)} questions from {slug}")

    def _load_sample(self):
        for item in sample_bank.QUESTIONS:
            question = Question(**item)
            self._by_id[question.id] = question
            self.questions.setdefault(question.category, []).append(question)
        for slug, questions in list(self.questions.items()):
            self._add_category(slug, questions)

    def _add_category(self, slug: str, questions: List[Question]):
        known = {c["slug"]: c for c in sample_bank.CATEGORIES}.get(slug)
        self.questions[slug] = questions
        self.categories[slug] = QuizCategory(
            slug=slug,
            name=known["name"] if known else slug.replace("_", " ").title(),
            description=known["description"] if known else "",
            count=len(questions),
        )

    def get_categories(self) -> List[QuizCategory]:
        return sorted(self.categories.values(), key=lambda c: c.name)

    def get_category(self, slug: str) -> Optional[QuizCategory]:
        return self.categories.get(slug)

    def get_questions(self, slug: str) -> List[Question]:
        return list(self.questions.get(slug, []))

    def get_question(self, question_id: str) -> Optional[Question]:
        return self._by_id.get(question_id)

"""
Recipe Processor

Turns a finished recording into a recipe the user writes up by hand.

Flow:
    processor = RecipeProcessor(result, on_save=library.add)
    processor.start_manual()
    processor.update(title="Pasta Sauce", ingredients="2 lbs tomatoes\\n1 onion")
    processor.save()
    processor.export(Path("./recipes"))
"""

import logging
from dataclasses import fields, replace
from pathlib import Path
from typing import Callable, Optional

from config.settings import RECIPE_EXPORT_PATH
from recipes.export import export_recipe
from recipes.models import Recipe, parse_lines
from recording.models.recording_models import RecordingResult, utc_timestamp

# Fields the user edits directly
EDITABLE_FIELDS = frozenset(
    f.name for f in fields(Recipe) if f.name != "date_created"
)

# Fields edited as one entry per line
LIST_FIELDS = frozenset({"ingredients", "instructions"})


class RecipeProcessor:
    """
    Recipe draft bound to one recording.

    The draft only exists after start_manual(); editing, saving and
    exporting before that raise RuntimeError.
    """

    def __init__(
        self,
        recording: RecordingResult,
        on_save: Optional[Callable[[Recipe], None]] = None,
    ):
        self.logger = logging.getLogger(__name__)
        self.recording = recording
        self.on_save = on_save
        self.draft: Optional[Recipe] = None
        self.saved: Optional[Recipe] = None

    @property
    def is_editing(self) -> bool:
        return self.draft is not None

    def start_manual(self) -> Recipe:
        """Open an empty draft (keeps an existing one)"""
        if self.draft is None:
            self.draft = Recipe()
            self.logger.info(
                f"Manual recipe entry started for {self.recording.duration}s recording"
            )
        return self.draft

    def _require_draft(self) -> Recipe:
        if self.draft is None:
            raise RuntimeError("No recipe draft; call start_manual() first")
        return self.draft

    def update(self, **changes) -> Recipe:
        """
        Edit draft fields.

        ingredients/instructions accept either a list or editor text,
        which is split with parse_lines().

        Raises:
            RuntimeError: No draft open
            ValueError: Unknown field name
        """
        draft = self._require_draft()

        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown recipe field(s): {', '.join(sorted(unknown))}")

        for name, value in changes.items():
            if name in LIST_FIELDS:
                value = parse_lines(value) if isinstance(value, str) else list(value)
            else:
                value = str(value)
            setattr(draft, name, value)

        return draft

    def save(self) -> Recipe:
        """
        Stamp the creation date and hand the recipe to on_save.

        Returns:
            The saved copy of the draft
        """
        draft = self._require_draft()
        recipe = replace(
            draft,
            ingredients=list(draft.ingredients),
            instructions=list(draft.instructions),
            date_created=utc_timestamp(),
        )
        self.saved = recipe

        if self.on_save:
            self.on_save(recipe)

        self.logger.info(f"Recipe saved: {recipe.title or '(untitled)'}")
        return recipe

    def export(self, directory: Path = RECIPE_EXPORT_PATH) -> Path:
        """Write the draft as a text file; returns the file path"""
        draft = self._require_draft()
        return export_recipe(draft, self.recording, directory)

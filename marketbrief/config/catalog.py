"""Source registry backed by the catalog file."""

from datetime import date
from typing import List, Optional, Union

import pendulum

from .models import CatalogModel, Frequency, SourceType, Stage

DATE_PLACEHOLDER = "YYYY/MM/DD"


def populate_date_url(url: str, run_date: Optional[date] = None) -> str:
    """Replace the ``YYYY/MM/DD`` placeholder with the local run date."""
    if DATE_PLACEHOLDER not in url:
        return url
    if run_date is None:
        run_date = pendulum.today().date()
    return url.replace(DATE_PLACEHOLDER, run_date.strftime("%Y/%m/%d"))


class SourceCatalog:
    """Resolve configured sources and prompt instructions."""

    def __init__(self, model: CatalogModel) -> None:
        self.model = model

    def sources_for(
        self,
        source_type: Union[SourceType, str],
        frequency: Union[Frequency, str] = Frequency.DAILY,
        run_date: Optional[date] = None,
    ) -> List[str]:
        """Configured URLs for a source type, in file order, with dates filled in."""
        urls = self.model.sources.get(Frequency(frequency), {}).get(SourceType(source_type), [])
        return [populate_date_url(url, run_date) for url in urls]

    def instruction(
        self,
        stage: Union[Stage, str],
        source_type: Union[SourceType, str],
        frequency: Union[Frequency, str] = Frequency.DAILY,
    ) -> str:
        """Prompt instruction for a stage; raises ``ValueError`` when none is configured."""
        stage = Stage(stage)
        prompts = self.model.prompts.get(Frequency(frequency), {}).get(SourceType(source_type))
        text = getattr(prompts, stage.value, None) if prompts else None
        if not text:
            raise ValueError(
                f"Prompt for stage {stage.value} not found "
                f"({Frequency(frequency).value}/{SourceType(source_type).value})"
            )
        return text

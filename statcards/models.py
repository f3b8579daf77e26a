from datetime import date

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class ContributionDay(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: date
    contribution_count: int = Field(ge=0, alias="contributionCount")


class ContributionWeek(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    contribution_days: list[ContributionDay] = Field(
        default_factory=list, alias="contributionDays"
    )


class ContributionCalendarPayload(BaseModel):
    """Calendar as returned by GitHub: days grouped into weeks."""

    model_config = ConfigDict(populate_by_name=True)

    total_contributions: int = Field(alias="totalContributions")
    weeks: list[ContributionWeek] = Field(default_factory=list)


class ContributionCalendar(BaseModel):
    """Flat calendar with days sorted ascending by date."""

    total_contributions: int
    days: list[ContributionDay]


class StreakResult(BaseModel):
    current_streak: int = Field(ge=0)
    longest_streak: int = Field(ge=0)
    total_contributions: int
    current_streak_start: date | None = None
    current_streak_end: date | None = None
    longest_streak_start: date | None = None
    longest_streak_end: date | None = None


class UserStats(BaseModel):
    username: str
    name: str
    avatar_url: str
    total_stars: int
    total_commits: int
    total_prs: int
    total_issues: int
    total_repos: int
    contributed_to: int


class LanguageStat(BaseModel):
    name: str
    size: int
    color: str
    percentage: float


class Rank(BaseModel):
    level: str
    percentile: int

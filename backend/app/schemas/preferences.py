from pydantic import field_validator
from app.schemas import CamelModel


class UserPreferences(CamelModel):
    sports_interests: list[str] = []
    number_of_tvs: int = 1
    tv_setup_description: str = ""
    favorite_nba_teams: list[str] = []
    zip_code: str = ""

    @field_validator("favorite_nba_teams")
    @classmethod
    def normalize_teams(cls, teams: list[str]) -> list[str]:
        # behaves as a set, but keeps the order the user picked them in
        seen = []
        for code in teams:
            code = code.strip().upper()
            if code and code not in seen:
                seen.append(code)
        return seen

    @property
    def favorite_set(self) -> frozenset[str]:
        return frozenset(self.favorite_nba_teams)

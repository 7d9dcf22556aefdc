"""Pydantic schemas for stored documents and league configuration."""

from pydantic import BaseModel, Field, field_validator, model_validator


class TeamDocument(BaseModel):
    """Team document in the teams collection."""

    name: str = Field(..., min_length=1)
    zone: str | None = None
    contactEmail: str | None = None
    createdAt: str | None = None

    class Config:
        extra = 'allow'  # season totals (played, won, points, nrr...) ride along


class PlayerDocument(BaseModel):
    """Player document in the players collection."""

    name: str = Field(..., min_length=1)
    age: int = Field(..., ge=0, le=100)
    aadhaar: str | None = Field(None, pattern=r'^\d{12}$')
    phone: str | None = None
    preferredRole: str | None = None
    teamId: str | None = None
    createdAt: str | None = None
    checkedIn: bool = False
    checkedInAt: str | None = None

    class Config:
        extra = 'allow'


class SessionDocument(BaseModel):
    """Trial session document in the sessions collection."""

    type: str = Field(default='Trial', min_length=1)
    zone: str = Field(..., min_length=1)
    ground: str = Field(..., min_length=1)
    dateISO: str
    maxPlayers: int | None = Field(None, ge=1)
    notes: str | None = None
    createdAt: str | None = None

    class Config:
        extra = 'forbid'


class RegistrationDocument(BaseModel):
    """Signup for a trial session."""

    sessionId: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    age: int = Field(..., ge=0, le=100)
    phone: str | None = None
    aadhaar: str | None = Field(None, pattern=r'^\d{12}$')
    createdAt: str | None = None

    class Config:
        extra = 'forbid'


class LeagueConfig(BaseModel):
    """League configuration settings."""

    league_name: str = Field(..., min_length=1)
    current_season: int = Field(..., ge=2000, le=2100)
    min_player_age: int = Field(..., ge=0, le=100)
    max_player_age: int | None = Field(None, ge=1, le=100)
    zones: list[str] = Field(default_factory=list)
    data_dir: str = 'data'

    @field_validator('zones')
    @classmethod
    def validate_zones(cls, v):
        """Ensure zone names are non-empty and unique."""
        seen = set()
        for zone in v:
            if not zone.strip():
                raise ValueError('Zone names must not be empty')
            if zone in seen:
                raise ValueError(f'Duplicate zone: {zone}')
            seen.add(zone)
        return v

    @model_validator(mode='after')
    def validate_age_range(self):
        """Ensure the age range is not inverted."""
        if self.max_player_age is not None and self.max_player_age < self.min_player_age:
            raise ValueError(
                f'max_player_age ({self.max_player_age}) is below '
                f'min_player_age ({self.min_player_age})'
            )
        return self

    class Config:
        extra = 'forbid'

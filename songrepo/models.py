from dataclasses import asdict, dataclass
from typing import Any

SECONDS_PER_MINUTE = 60


@dataclass(frozen=True)
class Song:
    id: str
    title: str
    artist_name: str
    album_title: str = ""
    # Seconds
    duration: float | None = None
    artwork_url: str | None = None
    uri: str | None = None
    preview_url: str | None = None

    @property
    def formatted_duration(self) -> str:
        """Return the duration as m:ss, or --:-- when the catalog didn't send one."""
        if self.duration is None:
            return "--:--"
        minutes, seconds = divmod(int(self.duration), SECONDS_PER_MINUTE)
        return f"{minutes}:{seconds:02d}"

    def to_dict(self) -> dict[str, Any]:
        song_dict = asdict(self)
        song_dict["formatted_duration"] = self.formatted_duration
        return song_dict

"""Reference data offered as discover filter choices."""

from typing import Dict, List, Optional

from pydantic import BaseModel

from app.models.discover import MediaType, SortBy


class Option(BaseModel):
    """A selectable value with a display label."""

    value: str
    label: str


class CatalogEntry(BaseModel):
    """A TMDB entity referenced by numeric ID (genre, studio, provider)."""

    id: int
    name: str
    logo_path: Optional[str] = None


SORT_LABELS: Dict[SortBy, str] = {
    SortBy.POPULARITY_DESC: "Popularity ↓",
    SortBy.POPULARITY_ASC: "Popularity ↑",
    SortBy.RELEASE_DATE_DESC: "Release Date ↓",
    SortBy.RELEASE_DATE_ASC: "Release Date ↑",
    SortBy.VOTE_AVERAGE_DESC: "Rating ↓",
    SortBy.VOTE_AVERAGE_ASC: "Rating ↑",
    SortBy.VOTE_COUNT_DESC: "Votes ↓",
    SortBy.VOTE_COUNT_ASC: "Votes ↑",
}

MOVIE_GENRES: Dict[int, str] = {
    28: "Action",
    12: "Adventure",
    16: "Animation",
    35: "Comedy",
    80: "Crime",
    99: "Documentary",
    18: "Drama",
    10751: "Family",
    14: "Fantasy",
    36: "History",
    27: "Horror",
    10402: "Music",
    9648: "Mystery",
    10749: "Romance",
    878: "Science Fiction",
    10770: "TV Movie",
    53: "Thriller",
    10752: "War",
    37: "Western",
}

TV_GENRES: Dict[int, str] = {
    10759: "Action & Adventure",
    16: "Animation",
    35: "Comedy",
    80: "Crime",
    99: "Documentary",
    18: "Drama",
    10751: "Family",
    10762: "Kids",
    9648: "Mystery",
    10763: "News",
    10764: "Reality",
    10765: "Sci-Fi & Fantasy",
    10766: "Soap",
    10767: "Talk",
    10768: "War & Politics",
    37: "Western",
}

MOVIE_CERTIFICATIONS: List[str] = ["G", "PG", "PG-13", "R", "NC-17"]
TV_CERTIFICATIONS: List[str] = ["TV-Y", "TV-G", "TV-PG", "TV-14", "TV-MA"]

VOTE_COUNT_PRESETS: List[int] = [500, 1000, 5000]

STREAMING_PROVIDERS: List[CatalogEntry] = [
    CatalogEntry(id=8, name="Netflix", logo_path="/t2yyOv40HZeVlLjYsCsPHnWLk4W.jpg"),
    CatalogEntry(
        id=9, name="Amazon Prime Video", logo_path="/emthp39XA2YScoYL1p0sdbAH2WA.jpg"
    ),
    CatalogEntry(id=337, name="Disney Plus", logo_path="/7rwgEs15tFwyR9NPQ5vpzxTj19Q.jpg"),
    CatalogEntry(id=384, name="HBO Max", logo_path="/Ajqyt5aNxNGjmF9uOfxArGrdf3X.jpg"),
    CatalogEntry(
        id=350, name="Apple TV Plus", logo_path="/6uhKBfmtzFqOcLousHwZuzcrScK.jpg"
    ),
    CatalogEntry(id=15, name="Hulu", logo_path="/zxrVdFjIjLqkfnwyghnfywTn3Lh.jpg"),
    CatalogEntry(
        id=531, name="Paramount Plus", logo_path="/xbhHHa1YgtpwhC8lb1NQ3ACVcLd.jpg"
    ),
    CatalogEntry(id=283, name="Crunchyroll", logo_path="/8Gt1iClBlzTeQs8WQm8UrCoIxnQ.jpg"),
    CatalogEntry(id=2, name="Apple iTunes", logo_path="/peURlLlr8jggOwK53fJ5wdQl05y.jpg"),
    CatalogEntry(
        id=3, name="Google Play Movies", logo_path="/tbEdFQDwx5LEVr8WpSeXQSIirVq.jpg"
    ),
    CatalogEntry(id=10, name="Amazon Video", logo_path="/emthp39XA2YScoYL1p0sdbAH2WA.jpg"),
    CatalogEntry(id=192, name="YouTube", logo_path="/kICQccvOh8AIBMHGkBXJ047xeHN.jpg"),
]

STUDIOS: List[CatalogEntry] = [
    CatalogEntry(id=2, name="Walt Disney Pictures"),
    CatalogEntry(id=3, name="Pixar"),
    CatalogEntry(id=4, name="Warner Bros. Pictures"),
    CatalogEntry(id=5, name="Columbia Pictures"),
    CatalogEntry(id=33, name="Universal Pictures"),
    CatalogEntry(id=34, name="Sony Pictures"),
    CatalogEntry(id=21, name="Metro-Goldwyn-Mayer"),
    CatalogEntry(id=25, name="20th Century Fox"),
    CatalogEntry(id=420, name="Marvel Studios"),
    CatalogEntry(id=1632, name="Lucasfilm"),
    CatalogEntry(id=7505, name="Netflix"),
    CatalogEntry(id=11073, name="DreamWorks Animation"),
    CatalogEntry(id=127928, name="A24"),
    CatalogEntry(id=923, name="Legendary Pictures"),
    CatalogEntry(id=6125, name="Blumhouse Productions"),
    CatalogEntry(id=12, name="New Line Cinema"),
    CatalogEntry(id=73669, name="Paramount Pictures"),
    CatalogEntry(id=9383, name="Amblin Entertainment"),
]

LANGUAGES: List[Option] = [
    Option(value="en", label="English"),
    Option(value="es", label="Spanish"),
    Option(value="fr", label="French"),
    Option(value="de", label="German"),
    Option(value="ja", label="Japanese"),
    Option(value="ko", label="Korean"),
    Option(value="zh", label="Chinese"),
    Option(value="hi", label="Hindi"),
    Option(value="it", label="Italian"),
    Option(value="pt", label="Portuguese"),
    Option(value="ru", label="Russian"),
]

REGIONS: List[str] = [
    "US", "GB", "CA", "AU", "NZ",
    "DE", "FR", "IT", "ES", "PT", "NL", "BE", "AT", "CH",
    "SE", "NO", "DK", "FI",
    "PL", "CZ", "HU", "RO", "GR", "TR",
    "BR", "MX", "AR", "CL", "CO",
    "JP", "KR", "IN", "SG", "PH", "TH", "MY", "ID",
    "ZA", "EG", "NG",
    "AE", "SA", "IL",
    "IE", "RU", "UA",
]  # fmt: skip


def genres_for(media_type: MediaType) -> Dict[int, str]:
    """Return the genre list TMDB uses for the given media type."""
    return MOVIE_GENRES if media_type == MediaType.MOVIE else TV_GENRES


def certifications_for(media_type: MediaType) -> List[str]:
    return MOVIE_CERTIFICATIONS if media_type == MediaType.MOVIE else TV_CERTIFICATIONS


def sort_options() -> List[Option]:
    return [Option(value=sort.value, label=label) for sort, label in SORT_LABELS.items()]

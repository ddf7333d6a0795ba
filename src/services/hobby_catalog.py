"""Static hobby catalog and lookups."""
from schemas.hobby import Hobby, HobbyCategory

CATEGORY_LABELS: dict[HobbyCategory, str] = {
    HobbyCategory.SPORTS: "Sports",
    HobbyCategory.INTELLECTUAL: "Intellectual",
    HobbyCategory.ART: "Art",
}

HOBBIES: tuple[Hobby, ...] = (
    Hobby(
        id="yoga",
        name="Yoga",
        category=HobbyCategory.SPORTS,
        description="Build flexibility and focus through breathing and posture practice.",
        image_url="/images/hobbies/yoga.jpg",
    ),
    Hobby(
        id="running",
        name="Running",
        category=HobbyCategory.SPORTS,
        description="Start with short jogs and work up to your first 10K.",
        image_url="/images/hobbies/running.jpg",
    ),
    Hobby(
        id="climbing",
        name="Indoor Climbing",
        category=HobbyCategory.SPORTS,
        description="Solve bouldering problems with strength and technique.",
        image_url="/images/hobbies/climbing.jpg",
    ),
    Hobby(
        id="swimming",
        name="Swimming",
        category=HobbyCategory.SPORTS,
        description="A full-body workout that is easy on the joints.",
        image_url="/images/hobbies/swimming.jpg",
    ),
    Hobby(
        id="chess",
        name="Chess",
        category=HobbyCategory.INTELLECTUAL,
        description="Learn openings, tactics and endgames one game at a time.",
        image_url="/images/hobbies/chess.jpg",
    ),
    Hobby(
        id="reading-club",
        name="Reading Club",
        category=HobbyCategory.INTELLECTUAL,
        description="Read a book a month and discuss it with others.",
        image_url="/images/hobbies/reading-club.jpg",
    ),
    Hobby(
        id="coding",
        name="Coding",
        category=HobbyCategory.INTELLECTUAL,
        description="Build small programs and automate everyday tasks.",
        image_url="/images/hobbies/coding.jpg",
    ),
    Hobby(
        id="language-study",
        name="Language Study",
        category=HobbyCategory.INTELLECTUAL,
        description="Pick up a new language with daily practice.",
        image_url="/images/hobbies/language-study.jpg",
    ),
    Hobby(
        id="pottery",
        name="Pottery",
        category=HobbyCategory.ART,
        description="Shape, glaze and fire your own ceramics on the wheel.",
        image_url="/images/hobbies/pottery.jpg",
    ),
    Hobby(
        id="watercolor",
        name="Watercolor",
        category=HobbyCategory.ART,
        description="Paint landscapes and still lifes with layered washes.",
        image_url="/images/hobbies/watercolor.jpg",
    ),
    Hobby(
        id="photography",
        name="Photography",
        category=HobbyCategory.ART,
        description="Learn composition and light with any camera you have.",
        image_url="/images/hobbies/photography.jpg",
    ),
    Hobby(
        id="guitar",
        name="Guitar",
        category=HobbyCategory.ART,
        description="Learn chords and strumming patterns for your favorite songs.",
        image_url="/images/hobbies/guitar.jpg",
    ),
)

_HOBBIES_BY_ID: dict[str, Hobby] = {hobby.id: hobby for hobby in HOBBIES}


def list_hobbies(category: HobbyCategory | None = None) -> list[Hobby]:
    """Return catalog entries, optionally restricted to one category."""
    if category is None:
        return list(HOBBIES)
    return [hobby for hobby in HOBBIES if hobby.category == category]


def get_hobby(hobby_id: str) -> Hobby | None:
    """Look up a catalog entry by id."""
    return _HOBBIES_BY_ID.get(hobby_id)

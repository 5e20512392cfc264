"""
Bundled Dataset
Fixed movie data served by the local provider when no API key is configured
"""
from typing import Any, Dict, List

GENRES: List[Dict[str, Any]] = [
    {"id": 28, "name": "Action"},
    {"id": 12, "name": "Adventure"},
    {"id": 16, "name": "Animation"},
    {"id": 35, "name": "Comedy"},
    {"id": 80, "name": "Crime"},
    {"id": 99, "name": "Documentary"},
    {"id": 18, "name": "Drama"},
    {"id": 10751, "name": "Family"},
    {"id": 14, "name": "Fantasy"},
    {"id": 36, "name": "History"},
    {"id": 27, "name": "Horror"},
    {"id": 10402, "name": "Music"},
    {"id": 9648, "name": "Mystery"},
    {"id": 10749, "name": "Romance"},
    {"id": 878, "name": "Science Fiction"},
    {"id": 10770, "name": "TV Movie"},
    {"id": 53, "name": "Thriller"},
    {"id": 10752, "name": "War"},
    {"id": 37, "name": "Western"},
]

_GENRE_NAMES = {genre["id"]: genre["name"] for genre in GENRES}


def _movie(**fields: Any) -> Dict[str, Any]:
    fields.setdefault("adult", False)
    fields.setdefault("original_language", "en")
    fields.setdefault("original_title", fields["title"])
    fields["genres"] = [
        {"id": genre_id, "name": _GENRE_NAMES[genre_id]} for genre_id in fields["genre_ids"]
    ]
    return fields


# Ordered by popularity
MOVIES: List[Dict[str, Any]] = [
    _movie(
        id=1,
        title="The Shawshank Redemption",
        overview="Two imprisoned mates bond over a number of years, finding solace and "
                 "eventual redemption through acts of common decency.",
        poster_path="/q6y0Go1tsGEsmtFryDOJo3dEmqu.jpg",
        backdrop_path="/9cqNxx0GxF0bflNmkEBl9hlnxoB.jpg",
        vote_average=9.3,
        vote_count=26000,
        release_date="1994-09-23",
        genre_ids=[18, 80],
        popularity=123.456,
    ),
    _movie(
        id=2,
        title="The Godfather",
        overview="The aging patriarch of an organized crime dynasty transfers control of "
                 "his clandestine empire to his reluctant son.",
        poster_path="/3bhkrj58Vtu7enYsRolD1fZdja1.jpg",
        backdrop_path="/tmU7GeKVybMWFButWEGl2M4GeiP.jpg",
        vote_average=9.2,
        vote_count=19000,
        release_date="1972-03-14",
        genre_ids=[18, 80],
        popularity=111.123,
    ),
    _movie(
        id=3,
        title="The Dark Knight",
        overview="When the menace known as the Joker wreaks havoc and chaos on the people "
                 "of Gotham, Batman must accept one of the greatest psychological and "
                 "physical tests.",
        poster_path="/qJ2tW6WMUDux911r6m7haRef0WH.jpg",
        backdrop_path="/hqkIcbrOHL86UncnHIsHVcVmzue.jpg",
        vote_average=9.0,
        vote_count=32000,
        release_date="2008-07-16",
        genre_ids=[28, 80, 18],
        popularity=98.765,
    ),
    _movie(
        id=4,
        title="Pulp Fiction",
        overview="The lives of two mob hitmen, a boxer, a gangster and his wife, and a pair "
                 "of diner bandits intertwine in four tales of violence and redemption.",
        poster_path="/d5iIlFn5s0ImszYzBPb8JPIfbXD.jpg",
        backdrop_path="/4cDFJr4HnXN5AdPw4AKrmLlMWdO.jpg",
        vote_average=8.9,
        vote_count=27000,
        release_date="1994-09-10",
        genre_ids=[80, 18],
        popularity=87.654,
    ),
    _movie(
        id=5,
        title="Forrest Gump",
        overview="The presidencies of Kennedy and Johnson, the events of Vietnam, Watergate "
                 "and other historical events unfold from the perspective of an Alabama man.",
        poster_path="/arw2vcBveWOVZr6pxd9XTd1TdQa.jpg",
        backdrop_path="/7c9UiPHNbNGzRPNLKwk7LrKAzR.jpg",
        vote_average=8.8,
        vote_count=25000,
        release_date="1994-06-23",
        genre_ids=[35, 18, 10749],
        popularity=76.543,
    ),
    _movie(
        id=6,
        title="Inception",
        overview="A thief who steals corporate secrets through the use of dream-sharing "
                 "technology is given the inverse task of planting an idea into the mind "
                 "of a C.E.O.",
        poster_path="/9gk7adHYeDvHkCSEqAvQNLV5Uge.jpg",
        backdrop_path="/8ZTVqvKDQ8emSGUEMjsS4yHAwrp.jpg",
        vote_average=8.7,
        vote_count=30000,
        release_date="2010-07-15",
        genre_ids=[28, 878, 53],
        popularity=65.432,
    ),
    _movie(
        id=7,
        title="Interstellar",
        overview="A team of explorers travel through a wormhole in space in an attempt to "
                 "ensure humanity's survival.",
        poster_path="/gEU2QniE6E77NI6lCU6MxlNBvIx.jpg",
        backdrop_path="/xJHokMbljvjADYdit5fK5VQsXEG.jpg",
        vote_average=8.6,
        vote_count=28000,
        release_date="2014-11-07",
        genre_ids=[12, 18, 878],
        popularity=54.321,
    ),
    _movie(
        id=8,
        title="The Matrix",
        overview="A computer hacker learns from mysterious rebels about the true nature of "
                 "his reality and his role in the war against its controllers.",
        poster_path="/f89U3ADr1oiB1s9GkdPOEpXUk5H.jpg",
        backdrop_path="/fNG7i7RqMErkcqhohV2a6cV1Ehy.jpg",
        vote_average=8.7,
        vote_count=24000,
        release_date="1999-03-30",
        genre_ids=[28, 878],
        popularity=43.210,
    ),
]


def _credits(cast: List[tuple], crew: List[tuple]) -> Dict[str, Any]:
    return {
        "cast": [
            {"id": index + 1, "name": name, "character": character, "order": index}
            for index, (name, character) in enumerate(cast)
        ],
        "crew": [
            {"id": index + 1, "name": name, "job": job}
            for index, (name, job) in enumerate(crew)
        ],
    }


# Fields only returned by detail lookups
DETAILS: Dict[int, Dict[str, Any]] = {
    1: {
        "runtime": 142,
        "budget": 25000000,
        "revenue": 28341469,
        "imdb_id": "tt0111161",
        "tagline": "Fear can hold you prisoner. Hope can set you free.",
        **_credits(
            [
                ("Tim Robbins", "Andy Dufresne"),
                ("Morgan Freeman", "Ellis Boyd 'Red' Redding"),
                ("Bob Gunton", "Warden Samuel Norton"),
            ],
            [("Frank Darabont", "Director"), ("Frank Darabont", "Screenplay"), ("Stephen King", "Novel")],
        ),
    },
    2: {
        "runtime": 175,
        "budget": 6000000,
        "revenue": 245066411,
        "imdb_id": "tt0068646",
        "tagline": "An offer you can't refuse.",
        **_credits(
            [
                ("Marlon Brando", "Don Vito Corleone"),
                ("Al Pacino", "Michael Corleone"),
                ("James Caan", "Sonny Corleone"),
            ],
            [("Francis Ford Coppola", "Director"), ("Mario Puzo", "Screenplay")],
        ),
    },
    3: {
        "runtime": 152,
        "budget": 185000000,
        "revenue": 1004558444,
        "imdb_id": "tt0468569",
        "tagline": "Welcome to a world without rules.",
        **_credits(
            [
                ("Christian Bale", "Bruce Wayne"),
                ("Heath Ledger", "Joker"),
                ("Aaron Eckhart", "Harvey Dent"),
            ],
            [("Christopher Nolan", "Director"), ("Jonathan Nolan", "Screenplay")],
        ),
    },
    4: {
        "runtime": 154,
        "budget": 8000000,
        "revenue": 213928762,
        "imdb_id": "tt0110912",
        "tagline": "Just because you are a character doesn't mean you have character.",
        **_credits(
            [
                ("John Travolta", "Vincent Vega"),
                ("Samuel L. Jackson", "Jules Winnfield"),
                ("Uma Thurman", "Mia Wallace"),
            ],
            [("Quentin Tarantino", "Director"), ("Quentin Tarantino", "Writer")],
        ),
    },
    5: {
        "runtime": 142,
        "budget": 55000000,
        "revenue": 677387716,
        "imdb_id": "tt0109830",
        "tagline": "The world will never be the same once you've seen it through the eyes of Forrest Gump.",
        **_credits(
            [
                ("Tom Hanks", "Forrest Gump"),
                ("Robin Wright", "Jenny Curran"),
                ("Gary Sinise", "Lieutenant Dan Taylor"),
            ],
            [("Robert Zemeckis", "Director"), ("Eric Roth", "Screenplay"), ("Winston Groom", "Novel")],
        ),
    },
    6: {
        "runtime": 148,
        "budget": 160000000,
        "revenue": 839030630,
        "imdb_id": "tt1375666",
        "tagline": "Your mind is the scene of the crime.",
        **_credits(
            [
                ("Leonardo DiCaprio", "Cobb"),
                ("Joseph Gordon-Levitt", "Arthur"),
                ("Elliot Page", "Ariadne"),
            ],
            [("Christopher Nolan", "Director"), ("Christopher Nolan", "Writer")],
        ),
    },
    7: {
        "runtime": 169,
        "budget": 165000000,
        "revenue": 701729206,
        "imdb_id": "tt0816692",
        "tagline": "Mankind was born on Earth. It was never meant to die here.",
        **_credits(
            [
                ("Matthew McConaughey", "Cooper"),
                ("Anne Hathaway", "Brand"),
                ("Jessica Chastain", "Murph"),
            ],
            [("Christopher Nolan", "Director"), ("Jonathan Nolan", "Writer")],
        ),
    },
    8: {
        "runtime": 136,
        "budget": 63000000,
        "revenue": 463517383,
        "imdb_id": "tt0133093",
        "tagline": "Welcome to the Real World.",
        **_credits(
            [
                ("Keanu Reeves", "Neo"),
                ("Laurence Fishburne", "Morpheus"),
                ("Carrie-Anne Moss", "Trinity"),
            ],
            [("Lana Wachowski", "Director"), ("Lilly Wachowski", "Director")],
        ),
    },
}

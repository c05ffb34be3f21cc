# ABOUTME: Canned Google Books API response fixtures for testing.
# ABOUTME: Provides realistic JSON dicts matching the volumes endpoint response shapes.

VOLUME_FINAL_EMPIRE = {
    "kind": "books#volume",
    "id": "t_ZYYXZq4RgC",
    "volumeInfo": {
        "title": "Mistborn: The Final Empire",
        "authors": ["Brandon Sanderson"],
        "publisher": "Tor Books",
        "publishedDate": "2006-07-17",
        "description": "For a thousand years the ash fell and no flowers bloomed.",
        "industryIdentifiers": [
            {"type": "ISBN_10", "identifier": "076531178X"},
            {"type": "ISBN_13", "identifier": "9780765311788"},
        ],
        "pageCount": 541,
        "categories": ["Fiction", "Fantasy"],
        "averageRating": 4.5,
        "imageLinks": {
            "smallThumbnail": "http://books.google.com/books/content?id=t_ZYYXZq4RgC&zoom=5",
            "thumbnail": "http://books.google.com/books/content?id=t_ZYYXZq4RgC&zoom=1",
        },
    },
}

VOLUME_WELL_OF_ASCENSION = {
    "kind": "books#volume",
    "id": "8nGyPAAACAAJ",
    "volumeInfo": {
        "title": "The Well of Ascension (Mistborn #2)",
        "authors": ["Brandon Sanderson"],
        "publishedDate": "2007",
        "industryIdentifiers": [{"type": "ISBN_13", "identifier": "9780765316882"}],
        "pageCount": 590,
    },
}

VOLUME_HERO_OF_AGES = {
    "kind": "books#volume",
    "id": "hoa-2008",
    "volumeInfo": {
        "title": "The Hero of Ages (Mistborn #3)",
        "authors": ["Brandon Sanderson"],
        "publishedDate": "2008-10",
    },
}

VOLUME_FINAL_EMPIRE_NUMBERED = {
    "kind": "books#volume",
    "id": "fe-numbered",
    "volumeInfo": {
        "title": "The Final Empire (Mistborn #1)",
        "authors": ["Brandon Sanderson"],
        "publishedDate": "2006",
    },
}

VOLUME_MISTBORN_COMPANION = {
    "kind": "books#volume",
    "id": "mistborn-companion",
    "volumeInfo": {
        "title": "Mistborn Adventure Game",
        "authors": ["Brandon Sanderson"],
    },
}

VOLUME_ELANTRIS = {
    "kind": "books#volume",
    "id": "elantris-2005",
    "volumeInfo": {
        "title": "Elantris",
        "authors": ["Brandon Sanderson"],
        "publishedDate": "2005-04-21",
    },
}

# Only an ISBN-10 and only a small thumbnail
VOLUME_ISBN10_ONLY = {
    "kind": "books#volume",
    "id": "isbn10-only",
    "volumeInfo": {
        "title": "The Name of the Rose",
        "authors": ["Umberto Eco", "William Weaver"],
        "industryIdentifiers": [
            {"type": "OTHER", "identifier": "UOM:39015004553870"},
            {"type": "ISBN_10", "identifier": "0156001314"},
        ],
        "imageLinks": {
            "smallThumbnail": "http://books.google.com/books/content?id=isbn10-only&zoom=5",
        },
    },
}

# Nothing but an id
VOLUME_BARE = {
    "kind": "books#volume",
    "id": "bare-volume",
    "volumeInfo": {},
}

SEARCH_RESPONSE = {
    "kind": "books#volumes",
    "totalItems": 2,
    "items": [VOLUME_FINAL_EMPIRE, VOLUME_ISBN10_ONLY],
}

SEARCH_RESPONSE_EMPTY = {
    "kind": "books#volumes",
    "totalItems": 0,
}

ISBN_SEARCH_RESPONSE = {
    "kind": "books#volumes",
    "totalItems": 1,
    "items": [VOLUME_FINAL_EMPIRE],
}

SERIES_SEARCH_RESPONSE = {
    "kind": "books#volumes",
    "totalItems": 4,
    "items": [
        VOLUME_HERO_OF_AGES,
        VOLUME_MISTBORN_COMPANION,
        VOLUME_WELL_OF_ASCENSION,
        VOLUME_FINAL_EMPIRE_NUMBERED,
        # Duplicates are common across Google Books editions
        VOLUME_WELL_OF_ASCENSION,
    ],
}

AUTHOR_SEARCH_RESPONSE = {
    "kind": "books#volumes",
    "totalItems": 3,
    "items": [VOLUME_ELANTRIS, VOLUME_FINAL_EMPIRE, VOLUME_MISTBORN_COMPANION],
}

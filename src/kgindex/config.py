import re
from pathlib import Path

# Supported knowledge bases (one schema per run)
KNOWLEDGE_BASES = ("wikidata", "freebase", "dbpedia")

# Identifier patterns per knowledge base; group 1 is the dump-native id
ENTITY_PATTERNS = {
    "wikidata": re.compile(r"<?http://www\.wikidata\.org/entity/(Q\d+)>?"),
    "freebase": re.compile(r"<?http://rdf\.freebase\.com/ns/(m\.[^>]+)>?"),
    "dbpedia": re.compile(r"<?http://dbpedia\.org/resource/([^>]+)>?"),
}
PROPERTY_PATTERNS = {
    "wikidata": re.compile(r"<?http://www\.wikidata\.org/entity/(P\d+)>?"),
    "freebase": re.compile(r"<?http://rdf\.freebase\.com/ns/([^>]+)>?"),
    "dbpedia": re.compile(r"<?http://dbpedia\.org/((?:property|ontology)/[^>]+)>?"),
}
DBPEDIA_PROPERTY_PATTERN = re.compile(r"^(property|ontology)/(.+)$")

# Namespace prefixes written to prefixes.tsv and used for short ids
ENTITY_PREFIXES = {
    "wikidata": {"wd": "http://www.wikidata.org/entity/"},
    "freebase": {"fb": "http://rdf.freebase.com/ns/"},
    "dbpedia": {"dbr": "http://dbpedia.org/resource/"},
}
PROPERTY_PREFIXES = {
    "wikidata": {
        "wdt": "http://www.wikidata.org/prop/direct/",
        "p": "http://www.wikidata.org/prop/",
        "pq": "http://www.wikidata.org/prop/qualifier/",
        "pqn": "http://www.wikidata.org/prop/qualifier/value-normalized/",
        "ps": "http://www.wikidata.org/prop/statement/",
        "psn": "http://www.wikidata.org/prop/statement/value-normalized/",
    },
    "freebase": {"fb": "http://rdf.freebase.com/ns/"},
    "dbpedia": {
        "dbo": "http://dbpedia.org/ontology/",
        "dbp": "http://dbpedia.org/property/",
    },
}
DEFAULT_PROPERTY_PREFIX = {"wikidata": "wdt", "freebase": "fb"}

# Extra Wikidata property rows: prefix -> surface form suffix
WIKIDATA_QUALIFIER_SUFFIXES = (
    ("p", "statement"),
    ("pq", "qualifier"),
    ("pqn", "normalized qualifier"),
    ("ps", "value"),
    ("psn", "normalized value"),
)

# Input layout
LABEL_LANGUAGE = "en"
ENTITY_COLUMNS = ("id", "label", "description", "frequency", "types", "aliases")
PROPERTY_COLUMNS = ("id", "label", "frequency", "aliases", "inverses")
ENTITY_MIN_FIELDS = 4
PROPERTY_MIN_FIELDS = 3
LIST_SEPARATOR = ";"
TYPED_INTEGER_PATTERN = re.compile(r'^"?(\d+)"?(?:\^\^<[^>]+>)?$')

# Output artifacts (relative to the output directory)
INDEX_FILE = "index.tsv"
PREFIXES_FILE = "prefixes.tsv"
REDIRECTS_FILE = "redirects.tsv"
INVERSES_FILE = "inverses.tsv"
SUMMARY_FILE = "summary.json"
SUMMARY_SCHEMA_FILE = Path(__file__).resolve().parent / "schemas" / "index_summary.schema.json"

# Projection worker pool
PROJECTION_WORKERS = 4
PROJECTION_CHUNK_SIZE = 10000

# Logging
LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

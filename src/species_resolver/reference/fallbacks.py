"""Static species tables used when the occurrence API under-delivers.

GLOBAL_FALLBACKS must hold at least one species for every taxonomic class;
it is the only thing that guarantees a non-empty resolution.
"""

from __future__ import annotations

# (common name, binomial)
SpeciesRow = tuple[str, str]

GLOBAL_FALLBACKS: dict[str, tuple[SpeciesRow, ...]] = {
    "birds": (
        ("House Sparrow", "Passer domesticus"),
        ("Rock Dove", "Columba livia"),
        ("European Starling", "Sturnus vulgaris"),
        ("House Finch", "Haemorhous mexicanus"),
        ("American Robin", "Turdus migratorius"),
    ),
    "mammals": (
        ("House Mouse", "Mus musculus"),
        ("Brown Rat", "Rattus norvegicus"),
        ("Domestic Cat", "Felis catus"),
        ("Domestic Dog", "Canis familiaris"),
        ("White-tailed Deer", "Odocoileus virginianus"),
    ),
    "fish": (
        ("Goldfish", "Carassius auratus"),
        ("Common Carp", "Cyprinus carpio"),
        ("Largemouth Bass", "Micropterus salmoides"),
        ("Brown Trout", "Salmo trutta"),
        ("Channel Catfish", "Ictalurus punctatus"),
    ),
    "reptiles": (
        ("House Gecko", "Hemidactylus frenatus"),
        ("Green Anole", "Anolis carolinensis"),
        ("Garter Snake", "Thamnophis sirtalis"),
        ("Box Turtle", "Terrapene carolina"),
        ("Fence Lizard", "Sceloporus undulatus"),
    ),
    "amphibians": (
        ("American Bullfrog", "Lithobates catesbeianus"),
        ("Green Frog", "Lithobates clamitans"),
        ("Spring Peeper", "Pseudacris crucifer"),
        ("American Toad", "Anaxyrus americanus"),
        ("Wood Frog", "Lithobates sylvaticus"),
    ),
}

# Region tag → class name → rows. Regions only cover some classes.
REGIONAL_FALLBACKS: dict[str, dict[str, tuple[SpeciesRow, ...]]] = {
    "california": {
        "birds": (
            ("Anna's Hummingbird", "Calypte anna"),
            ("California Scrub-Jay", "Aphelocoma californica"),
            ("Western Bluebird", "Sialia mexicana"),
            ("Red-tailed Hawk", "Buteo jamaicensis"),
        ),
        "mammals": (
            ("California Ground Squirrel", "Otospermophilus beecheyi"),
            ("Coyote", "Canis latrans"),
            ("Mule Deer", "Odocoileus hemionus"),
            ("Bobcat", "Lynx rufus"),
        ),
        "reptiles": (
            ("Western Fence Lizard", "Sceloporus occidentalis"),
            ("Southern Alligator Lizard", "Elgaria multicarinata"),
            ("Gopher Snake", "Pituophis catenifer"),
            ("Western Rattlesnake", "Crotalus oreganus"),
        ),
    },
    "pacific_northwest": {
        "birds": (
            ("Steller's Jay", "Cyanocitta stelleri"),
            ("Dark-eyed Junco", "Junco hyemalis"),
            ("Pacific Wren", "Troglodytes pacificus"),
            ("Varied Thrush", "Ixoreus naevius"),
        ),
        "mammals": (
            ("Douglas Squirrel", "Tamiasciurus douglasii"),
            ("Black Bear", "Ursus americanus"),
            ("Elk", "Cervus canadensis"),
            ("Raccoon", "Procyon lotor"),
        ),
        "fish": (
            ("Chinook Salmon", "Oncorhynchus tshawytscha"),
            ("Coho Salmon", "Oncorhynchus kisutch"),
            ("Steelhead Trout", "Oncorhynchus mykiss"),
            ("Pacific Cod", "Gadus macrocephalus"),
        ),
    },
    "eastern_forests": {
        "birds": (
            ("Blue Jay", "Cyanocitta cristata"),
            ("Northern Cardinal", "Cardinalis cardinalis"),
            ("Wood Thrush", "Hylocichla mustelina"),
            ("Pileated Woodpecker", "Dryocopus pileatus"),
        ),
        "mammals": (
            ("Eastern Gray Squirrel", "Sciurus carolinensis"),
            ("White-tailed Deer", "Odocoileus virginianus"),
            ("Black Bear", "Ursus americanus"),
            ("Raccoon", "Procyon lotor"),
        ),
        "amphibians": (
            ("Wood Frog", "Lithobates sylvaticus"),
            ("Spring Peeper", "Pseudacris crucifer"),
            ("Red-backed Salamander", "Plethodon cinereus"),
            ("American Toad", "Anaxyrus americanus"),
        ),
    },
}

# Curated common names for upstream records that carry no vernacular name
SCIENTIFIC_TO_COMMON: dict[str, str] = {
    # Birds
    "Passer domesticus": "House Sparrow",
    "Columba livia": "Rock Dove",
    "Sturnus vulgaris": "European Starling",
    "Haemorhous mexicanus": "House Finch",
    "Turdus migratorius": "American Robin",
    "Corvus brachyrhynchos": "American Crow",
    "Poecile atricapillus": "Black-capped Chickadee",
    "Sitta carolinensis": "White-breasted Nuthatch",
    "Falco sparverius": "American Kestrel",
    "Buteo jamaicensis": "Red-tailed Hawk",
    "Calypte anna": "Anna's Hummingbird",
    # Mammals
    "Mus musculus": "House Mouse",
    "Rattus norvegicus": "Brown Rat",
    "Felis catus": "Domestic Cat",
    "Canis lupus": "Gray Wolf",
    "Odocoileus virginianus": "White-tailed Deer",
    "Procyon lotor": "Raccoon",
    "Sciurus carolinensis": "Eastern Gray Squirrel",
    "Tamias striatus": "Eastern Chipmunk",
    # Reptiles
    "Anolis carolinensis": "Green Anole",
    "Sceloporus undulatus": "Fence Lizard",
    "Thamnophis sirtalis": "Garter Snake",
    "Terrapene carolina": "Box Turtle",
    # Amphibians
    "Lithobates catesbeianus": "American Bullfrog",
    "Lithobates clamitans": "Green Frog",
    "Pseudacris crucifer": "Spring Peeper",
    "Anaxyrus americanus": "American Toad",
    # Fish
    "Carassius auratus": "Goldfish",
    "Cyprinus carpio": "Common Carp",
    "Micropterus salmoides": "Largemouth Bass",
    "Salmo trutta": "Brown Trout",
}

# Returned when even the global table is missing a class
EMERGENCY_SPECIES: SpeciesRow = ("Anna's Hummingbird", "Calypte anna")
EMERGENCY_TYPE = "bird"

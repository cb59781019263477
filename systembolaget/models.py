"""Record types for the article catalog and store directory documents."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Dict, Tuple

# Python attribute -> XML element name.
ARTICLE_TAGS: Dict[str, str] = {
    "number": "nr",
    "article_id": "Artikelid",
    "product_number": "Varnummer",
    "name": "Namn",
    "sub_name": "Namn2",
    "price": "Prisinklmoms",
    "volume_ml": "Volymiml",
    "price_per_litre": "PrisPerLiter",
    "sold_since": "Saljstart",
    "discontinued_since": "Slutlev",
    "product_group": "Varugrupp",
    "container_type": "Forpackning",
    "sealing_type": "Forslutning",
    "origin": "Ursprung",
    "origin_country": "Ursprunglandnamn",
    "producer": "Producent",
    "distributor": "Leverantor",
    "vintage": "Argang",
    "tested_vintage": "Provadargang",
    "alcohol_percentage": "Alkoholhalt",
    "assortment": "Sortiment",
    "organic": "Ekologisk",
    "kosher": "Koscher",
    "raw_materials": "RavarorBeskrivning",
}

STORE_TAGS: Dict[str, str] = {
    "number": "Nr",
    "type": "Typ",
    "address1": "Address1",
    "address2": "Address2",
    "address3": "Address3",
    "address4": "Address4",
    "address5": "Address5",
    "phone_number": "Telefon",
    "store_type": "ButiksTyp",
    "services": "Tjanster",
    "search_words": "SokOrd",
    "opening_hours": "Oppettider",
    "rt90x": "RT90x",
    "rt90y": "RT90y",
}


@dataclass(frozen=True)
class Article:
    """One catalog line item. All values are the raw text from the document."""

    number: str = ""
    article_id: str = ""
    product_number: str = ""  # shared by variants, e.g. different vintages
    name: str = ""
    sub_name: str = ""
    price: str = ""  # VAT included
    volume_ml: str = ""
    price_per_litre: str = ""
    sold_since: str = ""
    discontinued_since: str = ""
    product_group: str = ""
    container_type: str = ""
    sealing_type: str = ""
    origin: str = ""
    origin_country: str = ""
    producer: str = ""
    distributor: str = ""
    vintage: str = ""
    tested_vintage: str = ""
    alcohol_percentage: str = ""
    assortment: str = ""
    organic: str = ""
    kosher: str = ""
    raw_materials: str = ""

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class ArticleCatalog:
    created_at: str = ""
    info_message: str = ""
    articles: Tuple[Article, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Store:
    """A store or agent. Coordinates are RT90 grid values, kept as text."""

    number: str = ""
    type: str = ""
    address1: str = ""
    address2: str = ""
    address3: str = ""
    address4: str = ""
    address5: str = ""
    phone_number: str = ""
    store_type: str = ""
    services: str = ""
    search_words: str = ""
    opening_hours: str = ""
    rt90x: str = ""
    rt90y: str = ""

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    @property
    def address_lines(self) -> Tuple[str, ...]:
        lines = (self.address1, self.address2, self.address3, self.address4, self.address5)
        return tuple(line for line in lines if line)


@dataclass(frozen=True)
class StoreDirectory:
    info_message: str = ""
    stores: Tuple[Store, ...] = field(default_factory=tuple)

import os
from dataclasses import dataclass, field
from typing import Dict

from .base import Repository
from .key_value import KeyValueStore, LocalKeyValueStore, SqlKeyValueStore
from .local import JsonObjectFile, JsonTable, LocalRepository
from .sql import SqlRepository
from .tables import ADMINS, BANNERS, BRANDS, COLORS, FAQS, OPTIONS, PARTNERS, TRIMS, VEHICLES

LOCAL = "local"
DATABASE = "postgres"

# One file per table under the data directory
TABLE_FILES = {
    "brands": "brands.json",
    "vehicles": "vehicles.json",
    "trims": "trims.json",
    "colors": "colors.json",
    "options": "options.json",
    "faqs": "faqs.json",
    "banners": "banners.json",
    "partners": "partners.json",
    "admins": "admins.json",
}
SETTINGS_FILE = "settings.json"
COMPANY_INFO_FILE = "company-info.json"


@dataclass
class DataStore:
    """Every table of the catalog behind one object.

    Built once at startup by ``build_store`` and handed to consumers, which
    never need to know whether the files or the database are behind it.
    """
    mode: str
    brands: Repository
    vehicles: Repository
    trims: Repository
    colors: Repository
    options: Repository
    faqs: Repository
    banners: Repository
    partners: Repository
    admins: Repository
    settings: KeyValueStore
    company_info: KeyValueStore
    location: str = ""
    tables: Dict[str, Repository] = field(init=False, repr=False)

    def __post_init__(self):
        self.tables = {
            "brands": self.brands,
            "vehicles": self.vehicles,
            "trims": self.trims,
            "colors": self.colors,
            "options": self.options,
            "faqs": self.faqs,
            "banners": self.banners,
            "partners": self.partners,
            "admins": self.admins,
        }
        for repo in self.tables.values():
            repo.bind(self.tables)


def build_local_store(data_dir: str) -> DataStore:
    def table(spec):
        return LocalRepository(spec, JsonTable(os.path.join(data_dir, TABLE_FILES[spec.name])))

    return DataStore(
        mode=LOCAL,
        brands=table(BRANDS),
        vehicles=table(VEHICLES),
        trims=table(TRIMS),
        colors=table(COLORS),
        options=table(OPTIONS),
        faqs=table(FAQS),
        banners=table(BANNERS),
        partners=table(PARTNERS),
        admins=table(ADMINS),
        settings=LocalKeyValueStore(JsonObjectFile(os.path.join(data_dir, SETTINGS_FILE))),
        company_info=LocalKeyValueStore(JsonObjectFile(os.path.join(data_dir, COMPANY_INFO_FILE))),
        location=os.path.abspath(data_dir),
    )


def build_sql_store(session_factory, location: str = "") -> DataStore:
    from ..models.admin_model import Admin
    from ..models.brand_model import Brand
    from ..models.content_model import Banner, Partner
    from ..models.faq_model import FAQ
    from ..models.setting_model import CompanyInfo, Setting
    from ..models.vehicle_model import Color, Trim, Vehicle, VehicleOption

    return DataStore(
        mode=DATABASE,
        brands=SqlRepository(BRANDS, session_factory, Brand),
        vehicles=SqlRepository(VEHICLES, session_factory, Vehicle),
        trims=SqlRepository(TRIMS, session_factory, Trim),
        colors=SqlRepository(COLORS, session_factory, Color),
        options=SqlRepository(OPTIONS, session_factory, VehicleOption),
        faqs=SqlRepository(FAQS, session_factory, FAQ),
        banners=SqlRepository(BANNERS, session_factory, Banner),
        partners=SqlRepository(PARTNERS, session_factory, Partner),
        admins=SqlRepository(ADMINS, session_factory, Admin),
        settings=SqlKeyValueStore(session_factory, Setting),
        company_info=SqlKeyValueStore(session_factory, CompanyInfo),
        location=location,
    )


def build_store(settings) -> DataStore:
    """Pick the storage strategy from ``settings.DB_MODE`` ('local' or 'postgres')."""
    mode = settings.DB_MODE.lower()
    if mode == LOCAL:
        return build_local_store(settings.DATA_DIR)
    if mode in (DATABASE, "database", "sql"):
        from ..core.database import Base, SessionLocal, engine
        Base.metadata.create_all(bind=engine)
        return build_sql_store(SessionLocal, engine.url.render_as_string(hide_password=True))
    raise ValueError(f"Unknown DB_MODE {settings.DB_MODE!r}; expected 'local' or 'postgres'")

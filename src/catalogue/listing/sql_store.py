"""SQLAlchemy listing store.

The reservation is a single conditional UPDATE:

    UPDATE listings SET quantity = quantity - :qty
    WHERE id = :id AND quantity >= :qty

so the database decides the race and ``rowcount`` tells us who won.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Float,
    Integer,
    MetaData,
    String,
    Table,
    create_engine,
    select,
    update,
)

from catalogue.listing.port import Listing, ListingStorePort

metadata = MetaData()

listings_table = Table(
    "listings",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("seller_id", String(64), nullable=False, index=True),
    Column("product_name", String(255), nullable=False),
    Column("price", Float, nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("is_active", Boolean, nullable=False, default=True),
)


def _engine_for(database_uri: str):
    if database_uri.startswith("sqlite"):
        # Pooled sqlite connections are shared across request threads
        return create_engine(database_uri, connect_args={"check_same_thread": False, "timeout": 30})
    return create_engine(database_uri, pool_pre_ping=True)


class SQLListingStore(ListingStorePort):
    def __init__(self, database_uri: str, create_schema: bool = True):
        self.engine = _engine_for(database_uri)
        if create_schema:
            self.create_schema()

    def create_schema(self):
        metadata.create_all(self.engine)

    def drop_schema(self):
        metadata.drop_all(self.engine)

    def find_by_id(self, listing_id: str) -> Listing | None:
        with self.engine.connect() as conn:
            row = conn.execute(select(listings_table).where(listings_table.c.id == str(listing_id))).mappings().first()
        if row is None:
            return None
        return Listing(
            id=row["id"],
            seller_id=row["seller_id"],
            product_name=row["product_name"],
            price=row["price"],
            quantity=row["quantity"],
            is_active=row["is_active"],
        )

    def reserve_quantity(self, listing_id: str, qty: int) -> bool:
        statement = (
            update(listings_table)
            .where(listings_table.c.id == str(listing_id))
            .where(listings_table.c.quantity >= qty)
            .values(quantity=listings_table.c.quantity - qty)
        )
        with self.engine.begin() as conn:
            result = conn.execute(statement)
        return result.rowcount == 1

    def release_quantity(self, listing_id: str, qty: int) -> None:
        statement = (
            update(listings_table)
            .where(listings_table.c.id == str(listing_id))
            .values(quantity=listings_table.c.quantity + qty)
        )
        with self.engine.begin() as conn:
            conn.execute(statement)

    def upsert(self, listing: Listing) -> Listing:
        values = {
            "seller_id": listing.seller_id,
            "product_name": listing.product_name,
            "price": listing.price,
            "quantity": listing.quantity,
            "is_active": listing.is_active,
        }
        with self.engine.begin() as conn:
            result = conn.execute(update(listings_table).where(listings_table.c.id == listing.id).values(**values))
            if result.rowcount == 0:
                conn.execute(listings_table.insert().values(id=listing.id, **values))
        return listing

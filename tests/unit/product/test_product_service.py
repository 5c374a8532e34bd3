"""Tests for product creation, lookup and display ids."""

import asyncio
from uuid import uuid4

import bson
import pytest
from pydantic import ValidationError as PydanticValidationError

from storefront_admin.core.modules.product.models import ProductForm
from storefront_admin.core.modules.product.service import MAX_DISPLAY_ID, parse_display_id
from storefront_admin.core.modules.records.models import Table
from storefront_admin.errors import DuplicateRecordError, FetchError, NotFoundError, RemoteOperationError


def stored_product(display_id, name="Stored", **extra):
    return {"_id": uuid4(), "name": name, "price": 100.0, "display_id": display_id, "display_order": 999, **extra}


class TestProductForm:
    """Tests for ProductForm validation."""

    def test_short_name_rejected(self):
        """Test that names shorter than 2 characters are rejected."""
        with pytest.raises(PydanticValidationError):
            ProductForm(name="A")

    def test_negative_numbers_rejected(self):
        """Test that price, stock, min_order and colors must be non-negative."""
        for field in ("price", "stock", "min_order", "colors"):
            with pytest.raises(PydanticValidationError):
                ProductForm(name="Jersey", **{field: -1})

    def test_null_jersey_type_normalized(self):
        """Test that the literal 'null' means no jersey type."""
        assert ProductForm(name="Jersey", jersey_type="null").jersey_type is None
        assert ProductForm(name="Jersey", jersey_type="").jersey_type is None
        assert ProductForm(name="Jersey", jersey_type="retro").jersey_type == "retro"

    def test_defaults(self):
        """Test form defaults."""
        form = ProductForm(name="Jersey")
        assert form.min_order == 10
        assert form.colors == 1
        assert form.display_order == 999
        assert form.image_url is None
        assert form.additional_images == []

    def test_images_split(self):
        """Test that the first image is the main one."""
        form = ProductForm(name="Jersey", images=["a.jpg", "b.jpg", "c.jpg"])
        assert form.image_url == "a.jpg"
        assert form.additional_images == ["b.jpg", "c.jpg"]


class TestCreateProduct:
    """Tests for ProductService.create_product."""

    def test_first_product_gets_display_id_one(self, product_service, records):
        """Test creation in an empty catalogue."""
        product = asyncio.run(product_service.create_product(ProductForm(name="Home Jersey", price=450)))
        assert product.display_id == 1
        assert records.tables[Table.PRODUCTS][0]["display_id"] == 1
        assert records.tables[Table.PRODUCTS][0]["_id"] == product.id

    def test_continues_after_existing_max(self, product_service, records):
        """Test that display ids continue after the largest existing one."""
        records.seed(Table.PRODUCTS, [stored_product(1), stored_product(3), stored_product(4)])
        product = asyncio.run(product_service.create_product(ProductForm(name="Away Jersey")))
        assert product.display_id == 5

    def test_consecutive_creations(self, product_service):
        """Test that consecutive creations get consecutive display ids."""

        async def create_three():
            return [await product_service.create_product(ProductForm(name=f"Jersey {i}")) for i in range(3)]

        products = asyncio.run(create_three())
        assert [p.display_id for p in products] == [1, 2, 3]

    def test_slug_and_images(self, product_service):
        """Test that slug and image fields are derived from the form."""
        form = ProductForm(name="Şampiyon Forması", images=["main.jpg", "side.jpg"])
        product = asyncio.run(product_service.create_product(form))
        assert product.slug == "sampiyon-formasi"
        assert product.image_url == "main.jpg"
        assert product.additional_images == ["side.jpg"]

    def test_failed_insert_reuses_display_id(self, product_service, records):
        """Test that a rejected insert does not consume the display id."""
        records.fail_insert = True
        with pytest.raises(RemoteOperationError):
            asyncio.run(product_service.create_product(ProductForm(name="Jersey")))
        assert Table.PRODUCTS not in records.tables or records.tables[Table.PRODUCTS] == []

        product = asyncio.run(product_service.create_product(ProductForm(name="Jersey")))
        assert product.display_id == 1

    def test_fetch_failure_blocks_creation(self, product_service, records):
        """Test that nothing is created when the display id scan fails."""
        records.fail_select = True
        with pytest.raises(FetchError):
            asyncio.run(product_service.create_product(ProductForm(name="Jersey")))
        assert records.tables.get(Table.PRODUCTS, []) == []

    def test_duplicate_display_id_triggers_rescan(self, product_service, records):
        """Test recovery when another admin took the cached display id."""
        asyncio.run(product_service.next_display_id())
        records.seed(Table.PRODUCTS, [stored_product(1, name="Created elsewhere")])

        with pytest.raises(DuplicateRecordError):
            asyncio.run(product_service.create_product(ProductForm(name="Jersey")))
        assert not product_service.display_ids.is_initialized

        product = asyncio.run(product_service.create_product(ProductForm(name="Jersey")))
        assert product.display_id == 2


class TestListProducts:
    """Tests for listing and the rescan it triggers."""

    def test_sorted_by_display_order(self, product_service, records):
        """Test ordering by display_order."""
        records.seed(
            Table.PRODUCTS,
            [stored_product(1, name="Last", display_order=5), stored_product(2, name="First", display_order=1)],
        )
        products = asyncio.run(product_service.list_products())
        assert [p.name for p in products] == ["First", "Last"]

    def test_listing_rescans_sequence(self, product_service, records):
        """Test that opening the list picks up products created elsewhere."""
        assert asyncio.run(product_service.next_display_id()) == 1
        records.seed(Table.PRODUCTS, [stored_product(7)])
        asyncio.run(product_service.list_products())
        assert asyncio.run(product_service.next_display_id()) == 8


class TestUpdateAndDelete:
    """Tests for update_product and delete_product."""

    def test_update_keeps_display_id(self, product_service, records):
        """Test that updating never changes the display id."""
        doc = stored_product(4, image_url="old.jpg")
        records.seed(Table.PRODUCTS, [doc])
        form = ProductForm(name="Renamed Jersey", price=300)
        product = asyncio.run(product_service.update_product(doc["_id"], form))
        assert product.display_id == 4
        assert product.name == "Renamed Jersey"
        assert product.slug == "renamed-jersey"
        assert product.image_url == "old.jpg"
        assert product.updated_at is not None

    def test_update_missing_product(self, product_service):
        """Test that updating an unknown product raises NotFoundError."""
        with pytest.raises(NotFoundError):
            asyncio.run(product_service.update_product(uuid4(), ProductForm(name="Jersey")))

    def test_delete_does_not_recycle_display_id(self, product_service, records):
        """Test that the deleted display id is not handed out again."""

        async def scenario():
            first = await product_service.create_product(ProductForm(name="First"))
            await product_service.delete_product(first.id)
            return await product_service.create_product(ProductForm(name="Second"))

        assert asyncio.run(scenario()).display_id == 2

    def test_delete_missing_product(self, product_service):
        """Test that deleting an unknown product raises NotFoundError."""
        with pytest.raises(NotFoundError):
            asyncio.run(product_service.delete_product(uuid4()))


class TestResolveProduct:
    """Tests for lookup by display id with UUID fallback."""

    def test_by_display_id(self, product_service, records):
        """Test numeric references resolve by display id."""
        doc = stored_product(12, name="Twelve")
        records.seed(Table.PRODUCTS, [doc])
        assert asyncio.run(product_service.resolve_product("12")).name == "Twelve"

    def test_by_uuid(self, product_service, records):
        """Test UUID references resolve by primary key."""
        doc = stored_product(3, name="Three")
        records.seed(Table.PRODUCTS, [doc])
        assert asyncio.run(product_service.resolve_product(str(doc["_id"]))).name == "Three"

    def test_unknown_reference(self, product_service):
        """Test that unknown references raise NotFoundError."""
        with pytest.raises(NotFoundError):
            asyncio.run(product_service.resolve_product("99"))
        with pytest.raises(NotFoundError):
            asyncio.run(product_service.resolve_product("not-a-product"))

    def test_display_id_too_large_for_bson(self, product_service, records, monkeypatch):
        """Test that a ref beyond int64 is not sent to the database as a display id."""
        select_one = records.select_one

        async def encoding_select_one(table, filter):
            bson.encode(filter)
            return await select_one(table, filter)

        monkeypatch.setattr(records, "select_one", encoding_select_one)
        with pytest.raises(NotFoundError):
            asyncio.run(product_service.resolve_product("9" * 32))


class TestParseDisplayId:
    """Tests for parse_display_id."""

    def test_plain_number(self):
        """Test that ASCII digits parse."""
        assert parse_display_id("42") == 42
        assert parse_display_id(str(MAX_DISPLAY_ID)) == MAX_DISPLAY_ID

    def test_not_a_display_id(self):
        """Test refs that cannot be stored as a display id."""
        assert parse_display_id(str(MAX_DISPLAY_ID + 1)) is None
        assert parse_display_id("9" * 5000) is None
        assert parse_display_id("²") is None
        assert parse_display_id("-3") is None
        assert parse_display_id(str(uuid4())) is None


class TestListDuringCreate:
    """Tests for a listing that overlaps an in-flight creation."""

    def test_listing_waits_for_in_flight_creation(self, product_service, records, monkeypatch):
        """Test that the creation succeeds and the next display id stays consecutive."""
        insert = records.insert
        select = records.select

        async def slow_insert(table, document):
            await asyncio.sleep(0.05)
            return await insert(table, document)

        async def slow_select(table, filter=None, fields=None, sort=None):
            if fields is not None:
                await asyncio.sleep(0.1)
            return await select(table, filter, fields, sort)

        monkeypatch.setattr(records, "insert", slow_insert)
        monkeypatch.setattr(records, "select", slow_select)

        async def scenario():
            created, _ = await asyncio.gather(
                product_service.create_product(ProductForm(name="Shirt")),
                product_service.list_products(),
            )
            following = await product_service.create_product(ProductForm(name="Scarf"))
            return created, following

        created, following = asyncio.run(scenario())
        assert created.display_id == 1
        assert following.display_id == 2
        assert sorted(doc["display_id"] for doc in records.tables[Table.PRODUCTS]) == [1, 2]

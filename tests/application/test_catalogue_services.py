from decimal import Decimal

import pytest

from storefront.domain.errors import NotFoundError, ValidationFailedError
from storefront.domain.schemas import (
    CategoryCreate,
    CategoryUpdate,
    ProductCreate,
    ProductSortField,
    ProductUpdate,
    SortOrder,
)
from storefront.services.category_service import CategoryService
from storefront.services.product_service import ProductService


@pytest.fixture()
def products(store):
    return ProductService(store)


@pytest.fixture()
def categories(store):
    return CategoryService(store)


class TestProductService:
    def test_create_requires_existing_category(self, products):
        with pytest.raises(NotFoundError):
            products.create_product(ProductCreate(name="X", price=Decimal("1"), stock=1, category_id="nope"))

    def test_create_and_partial_update(self, products, make_category):
        category = make_category()
        created = products.create_product(
            ProductCreate(name="Desk", price=Decimal("120.00"), stock=4, category_id=category.id)
        )

        updated = products.update_product(created.id, ProductUpdate(stock=9))

        assert updated.stock == 9
        assert updated.name == "Desk"
        assert updated.price == Decimal("120.00")

    def test_filters(self, products, make_product):
        make_product(name="Red Chair", price="50.00", category_id="c1")
        make_product(name="Blue Chair", price="80.00", category_id="c1")
        make_product(name="Table", price="200.00", category_id="c2", description="goes with any chair")

        by_name = products.list_products(limit=10, offset=0, name="CHAIR")
        assert by_name["total"] == 3

        by_category = products.list_products(limit=10, offset=0, category_id="c1")
        assert by_category["total"] == 2

        by_price = products.list_products(limit=10, offset=0, min_price=Decimal("60"), max_price=Decimal("100"))
        assert [p.name for p in by_price["items"]] == ["Blue Chair"]

    def test_sort_and_paginate(self, products, make_product):
        for name, price in (("b", "2"), ("c", "3"), ("a", "1"), ("d", "4")):
            make_product(name=name, price=price)

        page = products.list_products(
            limit=2, offset=1, sort_by=ProductSortField.PRICE, order=SortOrder.DESC
        )

        assert [p.name for p in page["items"]] == ["c", "b"]
        assert page["total"] == 4
        assert (page["limit"], page["offset"]) == (2, 1)

    def test_offset_past_end(self, products, make_product):
        make_product()

        page = products.list_products(limit=10, offset=5)

        assert page["items"] == []
        assert page["total"] == 1

    def test_delete_missing(self, products):
        with pytest.raises(NotFoundError):
            products.delete_product("missing")


class TestCategoryService:
    def test_parent_must_exist(self, categories):
        with pytest.raises(NotFoundError):
            categories.create_category(CategoryCreate(name="Orphan", parent_id="nope"))

    def test_tree(self, categories):
        root = categories.create_category(CategoryCreate(name="Home"))
        categories.create_category(CategoryCreate(name="Kitchen", parent_id=root.id))
        categories.create_category(CategoryCreate(name="Bath", parent_id=root.id))
        categories.create_category(CategoryCreate(name="Garden"))

        tree = categories.get_tree()

        assert [n.name for n in tree] == ["Garden", "Home"]
        assert [c.name for c in tree[1].children] == ["Bath", "Kitchen"]

    def test_orphan_shows_as_root(self, store, categories):
        root = categories.create_category(CategoryCreate(name="Root"))
        child = categories.create_category(CategoryCreate(name="Child", parent_id=root.id))
        store.delete_category(root.id)

        assert [n.id for n in categories.get_tree()] == [child.id]

    def test_cannot_parent_to_itself(self, categories):
        cat = categories.create_category(CategoryCreate(name="Solo"))

        with pytest.raises(ValidationFailedError):
            categories.update_category(cat.id, CategoryUpdate(parent_id=cat.id))

    def test_cannot_parent_to_descendant(self, categories):
        a = categories.create_category(CategoryCreate(name="A"))
        b = categories.create_category(CategoryCreate(name="B", parent_id=a.id))
        c = categories.create_category(CategoryCreate(name="C", parent_id=b.id))

        with pytest.raises(ValidationFailedError):
            categories.update_category(a.id, CategoryUpdate(parent_id=c.id))

        assert categories.get_category(a.id).parent_id is None

    def test_move_and_detach(self, categories):
        a = categories.create_category(CategoryCreate(name="A"))
        b = categories.create_category(CategoryCreate(name="B"))

        moved = categories.update_category(b.id, CategoryUpdate(parent_id=a.id))
        assert moved.parent_id == a.id

        detached = categories.update_category(b.id, CategoryUpdate.model_validate({"parentId": None}))
        assert detached.parent_id is None

    def test_rename_keeps_parent(self, categories):
        a = categories.create_category(CategoryCreate(name="A"))
        b = categories.create_category(CategoryCreate(name="B", parent_id=a.id))

        renamed = categories.update_category(b.id, CategoryUpdate(name="Bee"))

        assert renamed.name == "Bee"
        assert renamed.parent_id == a.id

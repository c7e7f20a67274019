import pytest

from storefront.domain.errors import InsufficientStockError, NotFoundError
from storefront.services.cart_service import CartService


@pytest.fixture()
def service(store):
    return CartService(store)


class TestAddItem:
    def test_add_new_item(self, service, make_product):
        product = make_product(stock=5)

        cart = service.add_item("u1", product.id, 2)

        assert [(i.product_id, i.quantity) for i in cart.items] == [(product.id, 2)]

    def test_same_product_twice_merges(self, service, make_product):
        product = make_product(stock=10)

        service.add_item("u1", product.id, 2)
        cart = service.add_item("u1", product.id, 3)

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 5

    def test_unknown_product(self, service):
        with pytest.raises(NotFoundError):
            service.add_item("u1", "missing", 1)

    def test_insufficient_stock(self, service, make_product):
        product = make_product(stock=1)

        with pytest.raises(InsufficientStockError):
            service.add_item("u1", product.id, 2)

    def test_add_persists_lazily_created_cart(self, store, service, make_product):
        product = make_product()
        assert not store.has_cart("u1")

        service.add_item("u1", product.id, 1)

        assert store.has_cart("u1")


class TestUpdateItem:
    def test_replace_quantity(self, service, make_product):
        product = make_product(stock=10)
        service.add_item("u1", product.id, 1)

        cart = service.update_item("u1", product.id, 7)

        assert cart.items[0].quantity == 7

    def test_item_not_in_cart(self, service, make_product):
        product = make_product()

        with pytest.raises(NotFoundError):
            service.update_item("u1", product.id, 1)

    def test_more_than_stock(self, service, make_product):
        product = make_product(stock=3)
        service.add_item("u1", product.id, 1)

        with pytest.raises(InsufficientStockError):
            service.update_item("u1", product.id, 4)


class TestRemoveAndClear:
    def test_remove_keeps_order_of_others(self, service, make_product):
        a, b, c = make_product(name="a"), make_product(name="b"), make_product(name="c")
        for p in (a, b, c):
            service.add_item("u1", p.id, 1)

        cart = service.remove_item("u1", b.id)

        assert [i.product_id for i in cart.items] == [a.id, c.id]

    def test_add_then_remove_shrinks_by_one(self, service, make_product):
        keep, temp = make_product(), make_product()
        service.add_item("u1", keep.id, 1)
        before = len(service.add_item("u1", temp.id, 1).items)

        after = service.remove_item("u1", temp.id)

        assert len(after.items) == before - 1
        assert temp.id not in [i.product_id for i in after.items]

    def test_remove_missing_item(self, service):
        with pytest.raises(NotFoundError):
            service.remove_item("u1", "missing")

    def test_clear(self, service, make_product):
        service.add_item("u1", make_product().id, 1)

        assert service.clear("u1").items == []

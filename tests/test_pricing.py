from fitzone.domain.store.pricing import apply_promo_code, quote, round_amount, shipping_cost


def test_new10_first_order_only():
    assert apply_promo_code("new10", 1000, is_first_order=True).discount == 100
    rejected = apply_promo_code("NEW10", 1000, is_first_order=False)
    assert rejected.valid is False
    assert rejected.message == "This code is only valid for first-time customers"


def test_flat100_minimum():
    assert apply_promo_code("FLAT100", 499, False).valid is False
    assert apply_promo_code("FLAT100", 500, False).discount == 100


def test_fitzone20_is_capped():
    assert apply_promo_code("FITZONE20", 500, False).discount == 100
    assert apply_promo_code("FITZONE20", 5000, False).discount == 200


def test_unknown_and_blank_codes():
    assert apply_promo_code("BOGUS", 800, False).message == "Invalid promo code"
    assert apply_promo_code("  ", 800, False).message == "Please enter a promo code"


def test_shipping_rules():
    assert shipping_cost(500, is_first_order=True) == 0
    assert shipping_cost(500, is_first_order=False) == 99
    assert shipping_cost(999, is_first_order=False) == 0
    assert shipping_cost(0, is_first_order=False) == 0


def test_total_never_negative():
    promo = apply_promo_code("FLAT100", 500, False)
    promo.discount = 1000
    assert quote(500, False, promo).total == 0


def test_quote_adds_shipping_and_subtracts_discount():
    promo = apply_promo_code("FLAT100", 600, False)
    price = quote(600, False, promo)
    assert (price.shipping, price.discount, price.total) == (99, 100, 599)
    assert price.promo_code == "FLAT100"


def test_round_half_up():
    assert round_amount(12.5) == 13
    assert round_amount(12.49) == 12

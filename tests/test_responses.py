import random

from schemas import ChatContext, Intent
from agent.responses import (
    GENERAL_TEMPLATES, INTRO_MESSAGE, RESPONDERS, build_response,
    connection_trouble, greeting_templates, welcome_messages,
)


def labels(resp):
    return [a.label for a in resp.actions]


def test_every_intent_has_a_responder():
    assert set(RESPONDERS) == set(Intent)
    for intent in Intent:
        resp = build_response(intent, ChatContext(), "", random.Random(1))
        assert resp.intent == intent
        assert resp.message


def test_greeting_anonymous_and_signed_in(john):
    anon = build_response(Intent.GREETING, ChatContext(), "hi", random.Random(0))
    assert anon.message in greeting_templates(None)
    assert anon.quick_replies == ["Show recommendations", "Browse products", "Help with cart", "Track order"]

    ctx = ChatContext(user=john)
    seen = {build_response(Intent.GREETING, ctx, "hi", random.Random(s)).message for s in range(30)}
    assert seen <= set(greeting_templates(john))
    assert "Hello John! How can I help you with your shopping today?" in greeting_templates(john)


def test_seeded_rng_is_reproducible():
    a = build_response(Intent.GENERAL, None, "", random.Random(123))
    b = build_response(Intent.GENERAL, None, "", random.Random(123))
    assert a.message == b.message
    assert a.message in GENERAL_TEMPLATES
    assert len(a.quick_replies) == 4


def test_cart_help_empty():
    resp = build_response(Intent.CART_HELP, ChatContext(hasItems=False), "cart")
    assert resp.message.startswith("Your cart is currently empty")
    assert labels(resp) == ["Get Recommendations", "Browse Products"]
    assert "Electronics" in resp.quick_replies


def test_cart_help_with_items(full_cart_context):
    resp = build_response(Intent.CART_HELP, full_cart_context, "cart")
    assert "You have 2 items in your cart totaling $149.97." in resp.message
    assert labels(resp) == ["Proceed to Checkout", "View Cart"]


def test_cart_help_single_item_and_explicit_total(catalog):
    ctx = ChatContext(cartItems=[{"product": catalog.get(6).model_dump(), "quantity": 1}], cartTotal=18.9)
    resp = build_response(Intent.CART_HELP, ctx, "cart")
    assert "You have 1 item in your cart totaling $18.90." in resp.message


def test_has_items_flag_wins_over_cart_items(full_cart_context):
    ctx = full_cart_context.model_copy(update={"has_items": False})
    resp = build_response(Intent.CART_HELP, ctx, "cart")
    assert resp.message.startswith("Your cart is currently empty")


def test_recommendations_lists_preferences(john):
    resp = build_response(Intent.RECOMMENDATIONS, ChatContext(user=john), "recommend")
    assert "electronics, books" in resp.message
    anon = build_response(Intent.RECOMMENDATIONS, ChatContext(), "recommend")
    assert anon.message.startswith("I'd love to recommend")
    assert labels(anon) == ["Popular Items", "New Arrivals"]


def test_order_tracking(john):
    anon = build_response(Intent.ORDER_TRACKING, ChatContext(), "track")
    assert labels(anon) == ["Sign In"]
    assert anon.quick_replies == []
    signed = build_response(Intent.ORDER_TRACKING, ChatContext(user=john), "track")
    assert labels(signed) == ["View Orders"]
    assert "Order History" in signed.message


def test_returns_has_start_return_action():
    resp = build_response(Intent.RETURNS, None, "refund")
    assert resp.actions[0].label == "Start Return"
    assert resp.actions[0].text == "I want to return an item"


def test_static_intents_have_no_actions():
    for intent in (Intent.SHIPPING, Intent.PRICING, Intent.SUPPORT):
        resp = build_response(intent)
        assert resp.actions == []
        assert len(resp.quick_replies) == 4


def test_product_search_echoes_terms():
    resp = build_response(Intent.PRODUCT_SEARCH, None, "find wireless headphones")
    assert '"wireless headphones"' in resp.message
    assert resp.actions[0].label == "Search Products"
    assert resp.actions[0].text == "Search for wireless headphones"

    bare = build_response(Intent.PRODUCT_SEARCH, None, "search")
    assert bare.message.startswith("What specific product")
    assert bare.actions == []


def test_checkout(full_cart_context):
    empty = build_response(Intent.CHECKOUT, ChatContext(), "buy")
    assert labels(empty) == ["Browse Products"]
    ready = build_response(Intent.CHECKOUT, full_cart_context, "buy")
    assert labels(ready) == ["Go to Checkout"]


def test_welcome_messages(full_cart_context):
    anon = welcome_messages(None)
    assert [m.message for m in anon] == [INTRO_MESSAGE]
    signed = welcome_messages(full_cart_context)
    assert len(signed) == 2
    assert signed[1].message.startswith("Welcome back, John! I can see you have 2 items in your cart.")


def test_connection_trouble():
    resp = connection_trouble()
    assert "trouble connecting" in resp.message
    assert resp.intent is None

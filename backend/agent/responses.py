from __future__ import annotations
import os, random
from typing import Callable, Dict, List, Optional

from schemas import ChatAction, ChatContext, ChatResponse, Intent, User
from services.chat import extract_search_terms

STORE_NAME = os.getenv("STORE_NAME", "AI Store")

CONNECTION_TROUBLE = "I'm sorry, I'm having trouble connecting right now. Please try again in a moment."

DEFAULT_QUICK_REPLIES = ["Show me recommendations", "Help with my cart", "Track my order", "Return policy"]

INTRO_MESSAGE = (
    "Hi! I'm your AI shopping assistant. I can help you with product recommendations, "
    "order information, and answer any questions you have. How can I assist you today?"
)

def _first_name(user: Optional[User]) -> str:
    return (user.first_name if user else None) or "there"

def _plural(n: int, word: str) -> str:
    return word if n == 1 else f"{word}s"

# ---------------- per-intent replies ----------------

def greeting_templates(user: Optional[User]) -> List[str]:
    if user:
        return [
            f"Hello {_first_name(user)}! How can I help you with your shopping today?",
            "Hi there! I see you're back. What can I assist you with?",
            "Welcome back! Ready to find some great products?",
        ]
    return [
        "Hello! I'm here to help you find the perfect products. What are you looking for?",
        "Hi! I can help you with product recommendations, orders, and more. How can I assist?",
        f"Welcome to {STORE_NAME}! I'm your personal shopping assistant. What can I help you with?",
    ]

GENERAL_TEMPLATES = [
    "I'd be happy to help! Can you tell me more about what you're looking for?",
    "I'm here to assist with your shopping needs. Could you be more specific about how I can help?",
    "Let me help you with that! What specific information do you need?",
    "I can help with products, orders, shipping, and more. What would you like to know?",
]

def greeting(ctx: ChatContext, message: str, rng: random.Random) -> ChatResponse:
    return ChatResponse(
        message=rng.choice(greeting_templates(ctx.user)),
        quick_replies=["Show recommendations", "Browse products", "Help with cart", "Track order"],
    )

def cart_help(ctx: ChatContext, message: str, rng: random.Random) -> ChatResponse:
    if not ctx.has_items:
        return ChatResponse(
            message="Your cart is currently empty. Would you like me to recommend some products or help you find something specific?",
            actions=[
                ChatAction(label="Get Recommendations", text="Show me recommendations"),
                ChatAction(label="Browse Products", text="Show me products"),
            ],
            quick_replies=["Electronics", "Food & Beverages", "Furniture", "Popular items"],
        )
    n = len(ctx.cart_items)
    total = ctx.cart_total or 0.0
    return ChatResponse(
        message=(
            f"You have {n} {_plural(n, 'item')} in your cart totaling ${total:.2f}. "
            "Would you like to proceed to checkout, modify your cart, or need help with anything else?"
        ),
        actions=[
            ChatAction(label="Proceed to Checkout", text="Take me to checkout"),
            ChatAction(label="View Cart", text="Show me my cart"),
        ],
        quick_replies=["Checkout now", "Add more items", "Remove items", "Apply coupon"],
    )

def recommendations(ctx: ChatContext, message: str, rng: random.Random) -> ChatResponse:
    prefs = ctx.preferences
    if prefs:
        text = f"Based on your interests in {', '.join(prefs)}, I can show you some great products! What type of recommendations would you like?"
    else:
        text = "I'd love to recommend some products for you! What categories interest you most, or would you like to see our popular items?"
    return ChatResponse(
        message=text,
        actions=[
            ChatAction(label="Popular Items", text="Show popular products"),
            ChatAction(label="New Arrivals", text="Show new products"),
        ],
        quick_replies=["Electronics", "Home & Garden", "Fashion", "Books", "Sports"],
    )

def order_tracking(ctx: ChatContext, message: str, rng: random.Random) -> ChatResponse:
    if ctx.user is None:
        return ChatResponse(
            message="To track your orders, please sign in to your account first. Once logged in, you can view all your order history and tracking information.",
            actions=[ChatAction(label="Sign In", text="Take me to login")],
        )
    return ChatResponse(
        message=(
            "I can help you track your orders! You can find detailed tracking information in your profile "
            "under 'Order History'. Would you like me to guide you there or help with something specific?"
        ),
        actions=[ChatAction(label="View Orders", text="Show my orders")],
        quick_replies=["Recent orders", "Delivery status", "Return an item"],
    )

def shipping(ctx: ChatContext, message: str, rng: random.Random) -> ChatResponse:
    return ChatResponse(
        message=(
            "We offer free shipping on orders over $50! Standard shipping takes 2-3 business days, and express "
            "shipping is available for next-day delivery. All orders are trackable once shipped."
        ),
        quick_replies=["Shipping costs", "Express delivery", "International shipping", "Track package"],
    )

def returns(ctx: ChatContext, message: str, rng: random.Random) -> ChatResponse:
    return ChatResponse(
        message=(
            "We have a hassle-free 30-day return policy! Items can be returned in original condition for a full "
            "refund. Electronics have a 15-day return window. Would you like help with a return?"
        ),
        actions=[ChatAction(label="Start Return", text="I want to return an item")],
        quick_replies=["Return process", "Refund timeline", "Exchange item", "Return shipping"],
    )

def product_search(ctx: ChatContext, message: str, rng: random.Random) -> ChatResponse:
    terms = extract_search_terms(message)
    if terms:
        return ChatResponse(
            message=f'I can help you find products related to "{terms}". Let me search our catalog for you!',
            actions=[ChatAction(label="Search Products", text=f"Search for {terms}")],
            quick_replies=["Electronics", "Home goods", "Fashion", "Books"],
        )
    return ChatResponse(
        message="What specific product are you looking for? I can search our entire catalog to find exactly what you need.",
        quick_replies=["Electronics", "Home goods", "Fashion", "Books"],
    )

def pricing(ctx: ChatContext, message: str, rng: random.Random) -> ChatResponse:
    return ChatResponse(
        message=(
            "We offer competitive prices with regular sales and discounts! Sign up for our newsletter to get "
            "exclusive deals. We also have a price-match policy for identical products."
        ),
        quick_replies=["Current sales", "Price match", "Newsletter signup", "Bulk discounts"],
    )

def support(ctx: ChatContext, message: str, rng: random.Random) -> ChatResponse:
    return ChatResponse(
        message=(
            "I'm here to help! I can assist with orders, products, shipping, returns, and account questions. "
            "What specific issue can I help you resolve?"
        ),
        quick_replies=["Order issues", "Product questions", "Account help", "Technical support"],
    )

def checkout(ctx: ChatContext, message: str, rng: random.Random) -> ChatResponse:
    if not ctx.has_items:
        return ChatResponse(
            message="You don't have any items in your cart yet. Would you like me to help you find some products first?",
            actions=[ChatAction(label="Browse Products", text="Show me products")],
        )
    return ChatResponse(
        message="Great! I can help you complete your purchase. Make sure to review your items and apply any discount codes before checkout.",
        actions=[ChatAction(label="Go to Checkout", text="Take me to checkout")],
        quick_replies=["Apply coupon", "Check shipping", "Payment options", "Review cart"],
    )

def general(ctx: ChatContext, message: str, rng: random.Random) -> ChatResponse:
    return ChatResponse(
        message=rng.choice(GENERAL_TEMPLATES),
        quick_replies=["Product recommendations", "Order help", "Shipping info", "Return policy"],
    )

Responder = Callable[[ChatContext, str, random.Random], ChatResponse]

RESPONDERS: Dict[Intent, Responder] = {
    Intent.GREETING: greeting,
    Intent.CART_HELP: cart_help,
    Intent.RECOMMENDATIONS: recommendations,
    Intent.ORDER_TRACKING: order_tracking,
    Intent.SHIPPING: shipping,
    Intent.RETURNS: returns,
    Intent.PRODUCT_SEARCH: product_search,
    Intent.PRICING: pricing,
    Intent.SUPPORT: support,
    Intent.CHECKOUT: checkout,
    Intent.GENERAL: general,
}

def build_response(intent: Intent, ctx: Optional[ChatContext] = None, message: str = "",
                   rng: Optional[random.Random] = None) -> ChatResponse:
    ctx = ctx or ChatContext()
    rng = rng or random.Random()
    resp = RESPONDERS[intent](ctx, message, rng)
    resp.intent = intent
    return resp

# ---------------- chat widget openers ----------------

def welcome_messages(ctx: Optional[ChatContext] = None) -> List[ChatResponse]:
    ctx = ctx or ChatContext()
    out = [ChatResponse(message=INTRO_MESSAGE, quick_replies=list(DEFAULT_QUICK_REPLIES))]
    if ctx.user is not None:
        n = len(ctx.cart_items)
        out.append(ChatResponse(message=(
            f"Welcome back, {_first_name(ctx.user)}! I can see you have {n} {_plural(n, 'item')} in your cart. "
            "Would you like to complete your purchase or need help finding something else?"
        )))
    return out

def connection_trouble() -> ChatResponse:
    return ChatResponse(message=CONNECTION_TROUBLE, quick_replies=list(DEFAULT_QUICK_REPLIES))

"""Collection (table) names in the hosted database (schema-in-code).

The store's schema is owned by the database project; these constants keep
names consistent across services, pages and realtime subscriptions.

Example:
    from mrcars_admin.application.dtos.query import Query
    from mrcars_admin.domain.collections import COLLECTION_ORDERS

    result = await store.fetch(Query(COLLECTION_ORDERS).count())
"""

COLLECTION_USERS = "users"
COLLECTION_PROFILES = "profiles"
COLLECTION_CARS = "cars"
COLLECTION_RENTAL_LISTINGS = "rental_listings"
COLLECTION_ORDERS = "orders"
COLLECTION_ORDER_ITEMS = "order_items"
COLLECTION_INQUIRIES = "inquiries"
COLLECTION_APPOINTMENTS = "appointments"
COLLECTION_NOTIFICATIONS = "notifications"
COLLECTION_FORUM_TOPICS = "forum_topics"
COLLECTION_FORUM_REPLIES = "forum_replies"

# Payments and subscriptions
COLLECTION_PAYMENT_TRANSACTIONS = "payment_transactions"
COLLECTION_USER_SUBSCRIPTIONS = "user_subscriptions"
COLLECTION_SUBSCRIPTION_PLANS = "subscription_plans"

# Shop and services
COLLECTION_TIRE_PRODUCTS = "tire_products"
COLLECTION_BATTERY_PRODUCTS = "battery_products"
COLLECTION_SERVICE_PROVIDERS = "service_providers"
COLLECTION_EMERGENCY_REQUESTS = "emergency_requests"

# Moderation
COLLECTION_BLOCKED_IPS = "blocked_ips"
COLLECTION_CONVERSATIONS = "conversations"

ALL_COLLECTIONS = frozenset({
    COLLECTION_USERS,
    COLLECTION_PROFILES,
    COLLECTION_CARS,
    COLLECTION_RENTAL_LISTINGS,
    COLLECTION_ORDERS,
    COLLECTION_ORDER_ITEMS,
    COLLECTION_INQUIRIES,
    COLLECTION_APPOINTMENTS,
    COLLECTION_NOTIFICATIONS,
    COLLECTION_FORUM_TOPICS,
    COLLECTION_FORUM_REPLIES,
    COLLECTION_PAYMENT_TRANSACTIONS,
    COLLECTION_USER_SUBSCRIPTIONS,
    COLLECTION_SUBSCRIPTION_PLANS,
    COLLECTION_TIRE_PRODUCTS,
    COLLECTION_BATTERY_PRODUCTS,
    COLLECTION_SERVICE_PROVIDERS,
    COLLECTION_EMERGENCY_REQUESTS,
    COLLECTION_BLOCKED_IPS,
    COLLECTION_CONVERSATIONS,
})

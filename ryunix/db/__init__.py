from ryunix.db.database import get_session, init_db
from ryunix.db.operations import (
    MODIFICATIONS_KEY,
    add_coin_log,
    add_gacha_card,
    banned_card_to_model,
    create_gacha_pack,
    create_user,
    delete_ban,
    delete_gacha_pack,
    gacha_pack_to_model,
    get_banlist,
    get_banned_card,
    get_card,
    get_cards_by_archetype,
    get_coin_log,
    get_gacha_pack,
    get_gacha_packs,
    get_modifications,
    get_purchase,
    get_purchases_by_user,
    get_user,
    get_user_by_username,
    insert_purchase,
    remove_archetype_from_card,
    update_gacha_pack,
    upsert_ban,
    upsert_bans,
    upsert_cards,
    upsert_modifications,
)

__all__ = [
    "MODIFICATIONS_KEY",
    "add_coin_log",
    "add_gacha_card",
    "banned_card_to_model",
    "create_gacha_pack",
    "create_user",
    "delete_ban",
    "delete_gacha_pack",
    "gacha_pack_to_model",
    "get_banlist",
    "get_banned_card",
    "get_card",
    "get_cards_by_archetype",
    "get_coin_log",
    "get_gacha_pack",
    "get_gacha_packs",
    "get_modifications",
    "get_purchase",
    "get_purchases_by_user",
    "get_session",
    "get_user",
    "get_user_by_username",
    "init_db",
    "insert_purchase",
    "remove_archetype_from_card",
    "update_gacha_pack",
    "upsert_ban",
    "upsert_bans",
    "upsert_cards",
    "upsert_modifications",
]

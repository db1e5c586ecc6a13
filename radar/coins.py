from __future__ import annotations

from typing import List, Optional, Tuple

from radar.models import CoinDescriptor


def _coin(symbol: str, display_name: str, icon_glyph: str) -> CoinDescriptor:
    return CoinDescriptor(symbol=symbol, display_name=display_name, icon_glyph=icon_glyph)


# One entry per ticker CSV shipped with the dashboard.
AVAILABLE_COINS: Tuple[CoinDescriptor, ...] = (
    _coin("ACT", "ACT", "🎭"),
    _coin("AI16Z", "AI16Z", "🤖"),
    _coin("AMC", "AMC", "🎬"),
    _coin("AVA", "AVA", "🌟"),
    _coin("BABYDOGE", "Baby Doge", "🐕"),
    _coin("BERTRAM", "Bertram", "🎩"),
    _coin("BDFINK", "BDFink", "🎨"),
    _coin("BHOLE", "BHole", "🕳️"),
    _coin("BOME", "Bome", "💥"),
    _coin("BONK", "Bonk", "🐕"),
    _coin("CHILL", "Chill", "😎"),
    _coin("COMEDIAN", "Comedian", "🎭"),
    _coin("FART", "Fart", "💨"),
    _coin("FARTBOY", "Fart Boy", "💨"),
    _coin("FLOTUS", "FLOTUS", "👑"),
    _coin("FWOG", "Fwog", "🐸"),
    _coin("GIGACHAD", "Gigachad", "💪"),
    _coin("GME", "GameStop", "🎮"),
    _coin("GOAT", "GOAT", "🐐"),
    _coin("HYSK", "HYSK", "🎯"),
    _coin("KWEEN", "Kween", "👑"),
    _coin("LIBRA", "Libra", "⚖️"),
    _coin("MANEKI", "Maneki", "🐱"),
    _coin("MCDULL", "McDull", "🐷"),
    _coin("MGTX", "MGTX", "💎"),
    _coin("MEW", "MEW", "🐱"),
    _coin("MICHI", "Michi", "🐱"),
    _coin("MOODENG", "Moodeng", "😊"),
    _coin("MYRO", "Myro", "🐕"),
    _coin("PAIN", "Pain", "😫"),
    _coin("PEANUT", "Peanut", "🥜"),
    _coin("PEPE", "Pepe", "🐸"),
    _coin("PIPPIN", "Pippin", "🎭"),
    _coin("PONKE", "Ponke", "🐒"),
    _coin("POPCAT", "Popcat", "🐱"),
    _coin("PWEASE", "Pwease", "🙏"),
    _coin("QUACK", "Quack", "🦆"),
    _coin("RETARDIO", "Retardio", "🤪"),
    _coin("SAMO", "Samoyedcoin", "🐕"),
    _coin("SIGMA", "Sigma", "💪"),
    _coin("SLERF", "Slerf", "🦊"),
    _coin("STONKS", "Stonks", "📈"),
    _coin("TATE", "Tate", "🎭"),
    _coin("TRUMP", "Trump", "👔"),
    _coin("UFD", "UFD", "🎭"),
    _coin("VINE", "Vine", "🍇"),
    _coin("WEN", "Wen", "⏰"),
    _coin("WIF", "Wif", "🐕"),
    _coin("ZEREBRO", "Zerebro", "🧠"),
)


def find_coin(query: str) -> Optional[CoinDescriptor]:
    """Exact, case-insensitive match on symbol or display name."""
    needle = (query or "").strip().lower()
    if not needle:
        return None
    for coin in AVAILABLE_COINS:
        if coin.symbol.lower() == needle or coin.display_name.lower() == needle:
            return coin
    return None


def search_coins(query: str | None) -> List[CoinDescriptor]:
    """Autocomplete helper: coins whose symbol or name contains the query."""
    needle = (query or "").strip().lower()
    if not needle:
        return list(AVAILABLE_COINS)
    return [
        coin
        for coin in AVAILABLE_COINS
        if needle in coin.symbol.lower() or needle in coin.display_name.lower()
    ]

"""
market_engine/symbols.py
────────────────────────
Static symbol sets, keyed display name → provider symbol.

Dict order is the iteration (and therefore request) order of each
fetcher.
"""

from typing import Dict, List

# ── Indices (Yahoo) ───────────────────────────────────────────────────────────
INDEX_SYMBOLS: Dict[str, str] = {
    "S&P 500": "^GSPC",
    "NASDAQ 100": "^NDX",
    "Dow Jones": "^DJI",
    "JSE Top 40": "^J200.JO",
}

# ── Forex ─────────────────────────────────────────────────────────────────────
FOREX_PAIRS: List[str] = [
    "EUR/USD",
    "GBP/USD",
    "USD/JPY",
    "USD/ZAR",
    "EUR/ZAR",
    "GBP/ZAR",
    "AUD/USD",
    "USD/CHF",
]

YAHOO_FOREX_SYMBOLS: Dict[str, str] = {
    pair: pair.replace("/", "") + "=X" for pair in FOREX_PAIRS
}

# ── Crypto (Yahoo) ────────────────────────────────────────────────────────────
CRYPTO_SYMBOLS: Dict[str, str] = {
    "BTC": "BTC-USD",
    "ETH": "ETH-USD",
    "XRP": "XRP-USD",
    "SOL": "SOL-USD",
    "ADA": "ADA-USD",
    "DOGE": "DOGE-USD",
    "AVAX": "AVAX-USD",
    "BNB": "BNB-USD",
    "LTC": "LTC-USD",
}

# The movers feed only samples the large caps.
CRYPTO_MOVER_SYMBOLS: Dict[str, str] = {
    name: CRYPTO_SYMBOLS[name] for name in ("BTC", "ETH", "XRP", "SOL", "ADA")
}

# ── Commodities (EODHD ETFs tracking spot) ────────────────────────────────────
COMMODITY_ETFS: Dict[str, str] = {
    "Gold": "GLD.US",
    "Silver": "SLV.US",
    "Platinum": "PPLT.US",
    "Crude Oil": "USO.US",
}

# One ETF share ≈ 1/10 oz of metal; USO already quotes near a barrel.
COMMODITY_SPOT_FACTORS: Dict[str, float] = {
    "Gold": 10.0,
    "Silver": 10.0,
    "Platinum": 10.0,
}

# ── Heatmaps (Yahoo) ──────────────────────────────────────────────────────────
FOREX_HEATMAP_SYMBOLS: Dict[str, str] = {
    **YAHOO_FOREX_SYMBOLS,
    "Gold": "GC=F",
    "Silver": "SI=F",
    "Crude Oil": "CL=F",
}

CRYPTO_HEATMAP_SYMBOLS: Dict[str, str] = dict(CRYPTO_SYMBOLS)

# ── Regional equities ─────────────────────────────────────────────────────────
JSE_SYMBOLS: Dict[str, str] = {
    "Naspers": "NPN.JO",
    "Prosus": "PRX.JO",
    "Anglo American": "AGL.JO",
    "BHP Group": "BHP.JO",
    "Standard Bank": "SBK.JO",
    "FirstRand": "FSR.JO",
    "MTN Group": "MTN.JO",
    "Sasol": "SOL.JO",
    "Shoprite": "SHP.JO",
    "Capitec Bank": "CPI.JO",
    "Sanlam": "SLM.JO",
    "Nedbank": "NED.JO",
    "Vodacom": "VOD.JO",
    "Impala Platinum": "IMP.JO",
    "Gold Fields": "GFI.JO",
}

US_STOCK_SYMBOLS: Dict[str, str] = {
    "Apple": "AAPL.US",
    "Microsoft": "MSFT.US",
    "Amazon": "AMZN.US",
    "Google": "GOOGL.US",
    "Tesla": "TSLA.US",
    "NVIDIA": "NVDA.US",
    "Meta": "META.US",
    "JPMorgan": "JPM.US",
    "Visa": "V.US",
    "Coca-Cola": "KO.US",
    "Johnson & Johnson": "JNJ.US",
    "Walmart": "WMT.US",
    "Mastercard": "MA.US",
    "Pfizer": "PFE.US",
    "Netflix": "NFLX.US",
}

# ── Stock screener (EODHD) ────────────────────────────────────────────────────
STOCK_SCREENERS: List[str] = ["most_gainer_stocks", "most_loser_stocks"]

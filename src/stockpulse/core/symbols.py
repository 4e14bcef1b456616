"""Fixed symbol tables for the Indian market."""

INDIAN_STOCKS = {
    "RELIANCE.NS": "Reliance Industries",
    "TCS.NS": "Tata Consultancy Services",
    "HDFCBANK.NS": "HDFC Bank",
    "INFY.NS": "Infosys",
    "HINDUNILVR.NS": "Hindustan Unilever",
    "ICICIBANK.NS": "ICICI Bank",
    "SBIN.NS": "State Bank of India",
    "BHARTIARTL.NS": "Bharti Airtel",
    "KOTAKBANK.NS": "Kotak Mahindra Bank",
    "ITC.NS": "ITC Limited",
}

# Only indices the provider reliably serves
INDIAN_INDICES = {
    "^NSEI": "Nifty 50",
    "^BSESN": "Sensex",
    "^CNX100": "Nifty 100",
}

RECOGNIZED_SUFFIXES = (".NS", ".BO")
RECOGNIZED_EXCHANGES = ("NSI", "BSE")
DEFAULT_EXCHANGE = "NSE"


def normalize_symbol(symbol: str) -> str:
    """Strip whitespace and upper-case a ticker symbol."""
    return symbol.strip().upper()


def is_recognized_market(symbol: str, exchange: str | None) -> bool:
    """Check whether a search hit belongs to an allowed exchange."""
    if any(suffix in symbol for suffix in RECOGNIZED_SUFFIXES):
        return True
    return exchange in RECOGNIZED_EXCHANGES

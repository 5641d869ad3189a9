"""
Keyword tables for India Trend Tracker.

This file is the single source of truth for every word list the system
scores, filters and groups by. The tables are process-wide constants:
tuples, frozensets and read-only mappings built once at import.

All keywords are lowercase and matched as case-insensitive substrings
(e.g. "ai" also matches "rain"), so be specific when adding short terms.

CUSTOMIZATION:

To tune headline scoring:
    1. Add terms to VIRAL_KEYWORDS (each hit is worth HEADLINE_KEYWORD_POINTS)
    2. Add trusted domains to TIER1_SOURCES

To tune what the scrapers accept:
    1. HEADLINE_KEYWORDS is the allow-list a scraped headline must hit
    2. HEADLINE_EXCLUDE_PATTERNS rejects navigation and boilerplate text
"""

import re
from types import MappingProxyType


# =============================================================================
# Headline Scoring
# =============================================================================

VIRAL_KEYWORDS: tuple[str, ...] = (
    "viral",
    "trending",
    "comeback",
    "surge",
    "trolled",
    "controversy",
    "backlash",
    "outrage",
    "sensation",
    "buzz",
    "breaking",
    "exclusive",
    "shocking",
    "massive",
    "epic",
    "incredible",
    "amazing",
    "stunning",
)

TIER1_SOURCES: tuple[str, ...] = (
    "timesofindia.indiatimes.com",
    "moneycontrol.com",
    "hindustantimes.com",
    "indianexpress.com",
    "ndtv.com",
    "economictimes.indiatimes.com",
    "business-standard.com",
    "livemint.com",
)

COUNTRY_TERMS: tuple[str, ...] = ("india", "indian")


# =============================================================================
# Social Trend Scoring (Twitter)
# =============================================================================

# Breaking-news indicators
SOCIAL_BREAKING_KEYWORDS: tuple[str, ...] = (
    "breaking", "urgent", "alert", "live", "now", "just in", "developing",
    "बड़ी खबर", "तत्काल", "अभी", "लाइव",
)

SOCIAL_VIRAL_KEYWORDS: tuple[str, ...] = (
    "viral", "trending", "shocking", "exposed", "scandal", "controversy",
    "वायरल", "ट्रेंडिंग",
)

SOCIAL_SENSATIONAL_KEYWORDS: tuple[str, ...] = (
    "massive", "huge", "major", "historic", "unprecedented", "dramatic",
    "explosive", "devastating", "stunning",
    "बड़ा", "भारी", "ऐतिहासिक",
)

SOCIAL_POLITICAL_KEYWORDS: tuple[str, ...] = (
    "modi", "rahul", "kejriwal", "parliament", "supreme court", "cbi", "ed",
    "मोदी", "राहुल", "केजरीवाल", "संसद",
)

SOCIAL_CRIME_KEYWORDS: tuple[str, ...] = (
    "arrest", "raid", "murder", "rape", "scam", "corruption", "fraud",
    "terror", "attack",
    "गिरफ्तार", "छापेमारी", "हत्या", "घोटाला",
)

SOCIAL_ENTERTAINMENT_KEYWORDS: tuple[str, ...] = (
    "bollywood", "cricket", "ipl", "wedding", "death", "accident",
    "बॉलीवुड", "क्रिकेट", "शादी", "मौत",
)

SOCIAL_COUNTRY_KEYWORDS: tuple[str, ...] = ("india", "indian", "भारत", "hindi")

# Broad "worth keeping" list for social trends that score low
SOCIAL_VIRAL_INDICATORS: frozenset[str] = frozenset((
    # Breaking news
    "breaking", "urgent", "alert", "live", "now", "just in", "developing",
    "बड़ी खबर", "तत्काल", "अभी", "तुरंत", "लाइव",
    # Viral content
    "viral", "trending", "shocking", "exposed", "scandal", "controversy",
    "arrest", "raid", "caught", "leaked", "exclusive", "bombshell",
    "वायरल", "ट्रेंडिंग", "गिरफ्तार", "छापेमारी", "एक्सक्लूसिव",
    # Sensational
    "massive", "huge", "major", "historic", "unprecedented", "dramatic",
    "explosive", "devastating", "stunning", "unbelievable",
    "बड़ा", "भारी", "ऐतिहासिक", "चौंकाने वाला", "हैरान करने वाला",
    # Political / social
    "modi", "rahul", "kejriwal", "parliament", "supreme court", "cbi", "ed",
    "farmer", "protest", "strike", "bandh", "riot", "violence",
    "मोदी", "राहुल", "केजरीवाल", "संसद", "सुप्रीम कोर्ट", "प्रदर्शन",
    # Crime and justice
    "murder", "rape", "scam", "corruption", "fraud", "terror", "attack",
    "हत्या", "बलात्कार", "घोटाला", "भ्रष्टाचार", "आतंक", "हमला",
    # Celebrity / entertainment
    "bollywood", "cricket", "ipl", "wedding", "death", "accident",
    "बॉलीवुड", "क्रिकेट", "शादी", "मौत", "दुर्घटना",
))

# Category label -> trigger terms, checked in order
SOCIAL_CATEGORIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Breaking News", ("breaking", "बड़ी खबर", "live", "लाइव")),
    ("Entertainment/Sports", ("bollywood", "cricket", "बॉलीवुड", "क्रिकेट")),
    ("Politics", ("modi", "parliament", "मोदी", "संसद")),
    ("Crime/Justice", ("arrest", "scam", "गिरफ्तार", "घोटाला")),
)


# =============================================================================
# Forum (Reddit) Scoring
# =============================================================================

# Per-community bonus
SUBREDDIT_BONUSES = MappingProxyType({
    "worldnews": 10,
    "india": 8,
    "unpopularopinion": 5,
})

# Lowers the engagement bar for a post
TRENDING_POST_KEYWORDS: tuple[str, ...] = (
    "breaking",
    "viral",
    "trending",
    "happening now",
    "just happened",
    "watch",
    "see this",
    "can't believe",
    "shocking",
    "amazing",
    "india",
    "modi",
    "bollywood",
    "cricket",
    "election",
    "pandemic",
    "ai",
    "technology",
    "startup",
    "economy",
    "stock market",
)


# =============================================================================
# Video (YouTube) Relevance
# =============================================================================

# Family / children / entertainment content is excluded outright
CHILDREN_CONTENT_KEYWORDS: tuple[str, ...] = (
    "kids", "children", "baby", "toddler", "cartoon", "nursery", "rhyme",
    "family", "mom", "dad", "papa", "mama", "bhai", "sister", "brother",
    "cute", "funny baby", "child", "bachcha", "बच्चा", "परिवार",
    "cooking", "recipe", "food", "kitchen", "dance", "music", "song",
    "comedy", "funny", "entertainment", "vlogs", "lifestyle", "games",
    "tutorial", "tech review", "unboxing", "reaction", "masti", "mazak",
    "हंसी", "मजाक", "गाना", "डांस", "खाना", "रेसिपी",
)

INDIAN_NEWS_KEYWORDS: tuple[str, ...] = (
    # General news / politics
    "india", "indian", "hindi", "news", "breaking", "latest", "update",
    "politics", "government", "minister", "pm modi", "parliament", "election",
    # Law and order
    "court", "supreme court", "high court", "judge", "legal", "law", "police",
    "crime", "arrest", "investigation", "case", "scam", "corruption",
    "protest", "rally", "strike", "demonstration", "controversy", "debate",
    # Economy and markets
    "economy", "market", "stock", "share", "sensex", "nifty", "rupee",
    "dollar", "budget", "tax", "gst", "income tax", "policy", "rbi",
    "reserve bank", "inflation", "gdp", "recession", "growth", "investment",
    "mutual fund", "ipo", "trading", "crypto", "bitcoin", "gold", "silver",
    "commodity", "banking", "loan", "interest rate", "emi", "credit", "debit",
    "salary", "pension", "pf", "epf", "insurance", "sip", "fd",
    "fixed deposit",
    # Business
    "business", "company", "startup", "unicorn", "ceo", "chairman", "profit",
    "loss", "revenue", "merger", "acquisition", "listing", "shares", "adani",
    "ambani", "tata", "reliance", "infosys", "wipro", "industry",
    # Cost of living and public services
    "petrol", "diesel", "lpg", "gas", "electricity", "power", "water",
    "railway", "train", "metro", "transport", "fuel", "price", "rate",
    "subsidy", "scheme", "yojana", "benefit", "welfare", "health",
    "education", "job", "employment", "unemployment", "salary hike",
    # Telecom and digital
    "internet", "mobile", "telecom", "jio", "airtel", "vi", "broadband",
    "upi", "digital", "online", "app", "technology", "ai",
    # Places and parties
    "delhi", "mumbai", "kolkata", "chennai", "bengaluru", "hyderabad",
    "punjab", "maharashtra", "gujarat", "rajasthan", "up", "bihar",
    "congress", "bjp", "aap", "tmc", "sp", "bsp", "party", "leader",
    # Viral markers
    "viral", "trending", "exposed", "shocking", "exclusive", "reality",
    # Hindi
    "समाचार", "न्यूज़", "राजनीति", "सरकार", "मंत्री", "अदालत", "पुलिस",
    "बाजार", "शेयर", "पैसा", "रुपया", "व्यापार", "कंपनी", "नौकरी",
    "रोजगार", "वेतन", "पेट्रोल", "डीजल", "गैस", "बिजली", "पानी", "ट्रेन",
    "मेट्रो", "स्वास्थ्य", "शिक्षा", "योजना", "सब्सिडी",
)

# Matched against the channel name only
NEWS_CHANNEL_PATTERNS: tuple[str, ...] = (
    "news", "tv", "channel", "media", "press", "times", "today", "live",
    "update", "bulletin", "report", "journalist", "anchor", "hindi news",
    "bharat", "hindustan", "aaj tak", "zee news", "ndtv", "republic", "cnbc",
    "india tv", "abp", "news18", "business", "finance", "money", "market",
    "stock", "economic", "financial", "business today", "et now",
    "bloomberg", "moneycontrol", "mint",
)

# A title hitting any of these counts as "viral enough" regardless of views
VIDEO_VIRAL_TERMS: tuple[str, ...] = (
    "viral", "trending", "breaking", "news", "exposed", "shocking", "market",
    "stock", "price", "rate", "budget", "scheme", "yojana", "salary", "job",
    "petrol", "diesel", "gas", "electricity",
)

VIDEO_MIN_VIEWS: int = 3000

# YouTube search query for news-oriented shorts
VIDEO_SEARCH_QUERY: str = " OR ".join((
    "breaking news", "latest news", "viral news", "trending news",
    "india news", "hindi news", "politics", "government", "minister",
    "parliament", "election", "protest", "scam", "corruption", "arrest",
    "court", "crime", "police", "market", "stock", "sensex", "nifty",
    "business", "economy", "budget", "tax", "price", "petrol", "diesel",
    "gas", "electricity", "salary", "job", "scheme", "yojana", "rbi",
    "inflation", "ipo", "company", "startup",
))


# =============================================================================
# Scraped Headline Filter
# =============================================================================

# A scraped headline must contain at least one of these
HEADLINE_KEYWORDS: tuple[str, ...] = (
    # News
    "india", "indian", "hindi", "desi", "government", "minister", "election",
    "court", "supreme", "parliament", "pm", "modi", "congress", "bjp",
    "covid", "vaccine", "economy", "rupee", "cricket", "ipl", "bollywood",
    "actor", "film", "movie", "celebrity", "star", "technology", "startup",
    "company", "market", "share", "price", "stock", "weather", "rain",
    "storm", "temperature", "flood", "drought", "festival", "celebration",
    "wedding", "death", "born", "award", "police", "arrest", "crime",
    "accident", "fire", "rescue", "school", "college", "university",
    "student", "exam", "result",
    # Viral / entertainment
    "viral", "trending", "youtube", "instagram", "twitter", "social",
    "comedian", "comedy", "meme", "funny", "video", "content", "creator",
    "influencer", "tiktoker", "youtuber", "samay", "raina", "latent",
    "tiger", "cubs", "kabaddi", "animal", "wildlife", "zoo", "forest",
    "entertainment", "show", "episode", "series", "web series", "ott",
    "netflix", "amazon", "hotstar", "zee5", "voot", "alt balaji", "gaming",
    "esports", "bgmi", "free fire", "pubg", "mobile", "music", "song",
    "singer", "album", "rap", "hip hop",
)

# Navigation, boilerplate and SEO text
HEADLINE_EXCLUDE_PATTERNS: tuple[re.Pattern, ...] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"subscribe", r"follow", r"share", r"like", r"comment", r"login",
        r"advertisement", r"sponsored", r"promoted", r"cookie", r"privacy",
        r"terms", r"contact", r"about", r"home", r"menu", r"search",
        r"^\d+$", r"^[^a-z]*$", r"seo", r"marketing", r"template", r"tool",
        r"insight", r"keyword", r"audit", r"traffic", r"^how to",
    )
)

HEADLINE_MIN_LENGTH: int = 15
HEADLINE_MAX_LENGTH: int = 200
HEADLINE_TRUNCATE_LENGTH: int = 120


# =============================================================================
# Cross-Source Matching
# =============================================================================

IMPORTANT_TERMS: tuple[str, ...] = (
    "israel", "iran", "modi", "india", "cricket", "bollywood", "election",
    "court", "police", "government", "ceasefire", "war", "conflict",
    "attack", "breaking", "live", "news", "update", "announces", "death",
    "arrest",
)

IMPORTANT_PHRASES: tuple[str, ...] = (
    "israel iran",
    "iran israel",
    "middle east",
    "air india",
    "train accident",
    "supreme court",
    "high court",
    "pm modi",
    "bollywood star",
    "cricket match",
)


# =============================================================================
# Viral Ranking
# =============================================================================

VIRAL_RANK_KEYWORDS: tuple[str, ...] = (
    "breaking", "viral", "trending", "shocking", "exclusive", "scandal",
    "controversy", "massive", "urgent", "alert", "exposed", "leaked",
    "bollywood", "cricket", "modi", "election", "arrest", "death",
    "accident",
)

RANK_COUNTRY_TERMS: tuple[str, ...] = ("india", "indian", "modi", "delhi", "mumbai")

EMOTIONAL_KEYWORDS: tuple[str, ...] = (
    "angry", "outrage", "protest", "fight", "clash", "attack", "win", "lose",
    "victory",
)

NEWS_URGENCY_TERMS: tuple[str, ...] = ("breaking", "live")


# =============================================================================
# Curated Fallback Topics
# =============================================================================

# Last resort when every search-trend upstream is down
CURATED_TRENDING_TOPICS: tuple[str, ...] = (
    "India vs England Test Series 2025",
    "Indian Stock Market Hits All-Time High",
    "Delhi Air Pollution Crisis",
    "Bollywood Box Office Collections",
    "Modi Government Infrastructure Projects",
    "Indian Startup Unicorn Funding",
    "Ayodhya Tourism Boom",
    "ISRO Chandrayaan Mission Updates",
    "Indian Railway Expansion Plans",
    "Farmer Income Doubling Scheme",
    "Digital India Payment Revolution",
    "Indian IT Industry Growth",
)

"""
Lightweight NLP utilities (lexicon sentiment, keyword extraction).
"""
from utils.nlp.sentiment_lexicon import DEFAULT_LEXICON, SentimentLexicon, score_sentiment
from utils.nlp.keyword_extractor import (
    KEYWORD_PATTERNS,
    STOP_WORDS,
    extract_candidate_terms,
    extract_keywords,
)

__all__ = [
    "DEFAULT_LEXICON",
    "SentimentLexicon",
    "score_sentiment",
    "KEYWORD_PATTERNS",
    "STOP_WORDS",
    "extract_candidate_terms",
    "extract_keywords",
]

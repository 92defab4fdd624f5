from .indicators import compute_indicators, sma, ema, rsi, macd, bollinger_bands, adx
from .levels import fibonacci_levels, find_levels, support_resistance
from .trend import classify_trend, classify_volatility
from .target import synthesize_target
from .confidence import score_confidence
from .recommendation import recommend
from .engine import PriceAnalyzer, analyze

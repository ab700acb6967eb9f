"""Business services of the image discovery engine.

Leaf-first:

    KeywordExtractor      title + body      → KeywordSet
    ThemeInferencer       KeywordSet        → themes (level-2 prompt only)
    CandidateParser       provider text     → candidates (score 0)
    RelevanceScorer       candidates        → scored, best-first
    PromptBuilder         article           → per-level prompts
    ResultAssembler       outcome           → response payload
    ImageDiscoveryService request           → response (facade)
"""

from image_discovery.services.candidate_parser import CandidateParser
from image_discovery.services.keyword_extractor import KeywordExtractor
from image_discovery.services.prompt_builder import PromptBuilder, SearchPrompt
from image_discovery.services.relevance_scorer import RelevanceScorer
from image_discovery.services.result_assembler import ResultAssembler
from image_discovery.services.theme_inferencer import ThemeInferencer

__all__ = [
    "CandidateParser",
    "KeywordExtractor",
    "PromptBuilder",
    "RelevanceScorer",
    "ResultAssembler",
    "SearchPrompt",
    "ThemeInferencer",
]

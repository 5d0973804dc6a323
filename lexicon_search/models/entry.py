"""Dictionary entry models shared by the lexicon stores and the search core."""

from typing import List, Optional

from pydantic import BaseModel, Field


class LexiconEntry(BaseModel):
    """A headword row as returned by the lexicon store lookups."""
    
    id: int = Field(..., description="Unique identifier of the dictionary entry")
    word: str = Field(..., description="The headword")
    pos: str = Field(..., description="Part of speech")
    definition: str = Field(default="", description="First stored definition text, empty if none")


class Definition(BaseModel):
    """A single meaning of a word."""
    
    id: Optional[int] = Field(None, description="Definition identifier, assigned by the store")
    text: str = Field(..., description="The definition text")
    examples: List[str] = Field(default_factory=list, description="Example sentences")
    tags: List[str] = Field(default_factory=list, description="Labels such as formal, slang or archaic")


class Pronunciation(BaseModel):
    """Pronunciation information for a word."""
    
    id: Optional[int] = Field(None, description="Pronunciation identifier, assigned by the store")
    ipa: Optional[str] = Field(None, description="IPA transcription")
    audio_url: Optional[str] = Field(None, description="URL to an audio recording")
    accent: Optional[str] = Field(None, description="Regional accent (US, UK, AU, ...)")


class Translation(BaseModel):
    """A translation of a word into another language."""
    
    id: Optional[int] = Field(None, description="Translation identifier, assigned by the store")
    target_language: str = Field(..., description="Target language code")
    translation: str = Field(..., description="The translated word or phrase")


class FullDefinition(BaseModel):
    """Complete dictionary entry with all meanings and related data."""
    
    id: Optional[int] = Field(None, description="Entry identifier, assigned by the store")
    word: str = Field(..., min_length=1, description="The headword")
    pos: str = Field(..., description="Part of speech")
    language: str = Field(default="English", description="Language of the entry")
    definitions: List[Definition] = Field(default_factory=list)
    pronunciations: List[Pronunciation] = Field(default_factory=list)
    etymology: Optional[str] = Field(None, description="Etymology text, if available")
    translations: List[Translation] = Field(default_factory=list)

    @property
    def first_definition(self) -> str:
        return self.definitions[0].text if self.definitions else ""


class CandidateMatch(BaseModel):
    """A scored entry produced by one of the match tiers."""
    
    id: int = Field(..., description="Unique identifier of the dictionary entry")
    word: str = Field(..., description="The matched headword")
    pos: str = Field(..., description="Part of speech")
    preview: str = Field(default="", description="Truncated first definition")
    score: float = Field(..., ge=0.0, description="Relevance score (lower is better, 0 = exact match)")
    match_type: str = Field(..., description="Tier that produced the match (exact, prefix, index, fuzzy)")

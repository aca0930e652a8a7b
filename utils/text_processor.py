# DEPENDENCIES
import re
from typing import Any
from typing import List
from typing import Dict
from typing import Iterable


class TextProcessor:
    """
    Text processing utilities for lease documents
    """
    PARAGRAPH_BREAK   = re.compile(r'\n\s*\n')
    SENTENCE_BREAK    = re.compile(r'[.!?]+\s+')
    MIN_CHUNK_LENGTH  = 20
    WINDOW_SIZE_RATIO = 1.5


    @staticmethod
    def split_into_paragraphs(text: str, min_length: int = 1) -> List[str]:
        """
        Split text on blank lines, dropping paragraphs shorter than min_length once trimmed
        """
        paragraphs = TextProcessor.PARAGRAPH_BREAK.split(text)

        return [p for p in paragraphs if len(p.strip()) >= min_length]


    @staticmethod
    def split_into_sentences(text: str) -> List[str]:
        """
        Split on terminal punctuation followed by whitespace; punctuation is consumed
        """
        sentences = TextProcessor.SENTENCE_BREAK.split(text)

        return [s.strip() for s in sentences if s.strip()]


    @staticmethod
    def chunk_lease_text(text: str, max_chunk_size: int = 500, overlap: int = 100) -> List[str]:
        """
        Split lease text into overlapping, bounded windows for rule matching

        Paragraphs that fit are kept whole. Longer paragraphs are packed sentence by
        sentence, and each new chunk is seeded with the last overlap // 10 words of the
        previous one. Adjacent chunks are then joined into sliding windows so wording
        that straddles a boundary is still seen in one piece.

        Arguments:
        ----------
            text           { str } : Raw lease text

            max_chunk_size { int } : Target maximum chunk length in characters

            overlap        { int } : Overlap budget; one word is carried per 10 units

        Returns:
        --------
                    { list }       : Unique chunks in document order, each at least 20 characters
        """
        base_chunks = list()

        for paragraph in TextProcessor.split_into_paragraphs(text):
            if (len(paragraph) <= max_chunk_size):
                base_chunks.append(paragraph.strip())
                continue

            base_chunks.extend(TextProcessor._pack_sentences(paragraph, max_chunk_size, overlap))

        windows = list()

        for first, second in zip(base_chunks, base_chunks[1:]):
            combined = first + ' ' + second

            if (len(combined) <= max_chunk_size * TextProcessor.WINDOW_SIZE_RATIO):
                windows.append(combined[:max_chunk_size])

        unique_chunks = list()
        seen          = set()

        for chunk in base_chunks + windows:
            key = chunk.strip().lower()

            if key in seen:
                continue

            seen.add(key)
            unique_chunks.append(chunk)

        return [chunk for chunk in unique_chunks if len(chunk) >= TextProcessor.MIN_CHUNK_LENGTH]


    @staticmethod
    def _pack_sentences(paragraph: str, max_chunk_size: int, overlap: int) -> List[str]:
        chunks        = list()
        current       = ''
        overlap_words = overlap // 10

        for sentence in TextProcessor.split_into_sentences(paragraph):
            if (len(current + sentence) <= max_chunk_size):
                current = f"{current} {sentence}" if current else sentence
                continue

            seed = ''

            if current:
                chunks.append(current)

                if (overlap_words > 0):
                    seed = ' '.join(current.split()[-overlap_words:])

            current = f"{seed} {sentence}" if seed else sentence

        if current:
            chunks.append(current)

        return chunks


    @staticmethod
    def contains_any(text: str, terms: Iterable[str]) -> bool:
        """
        Whether any term occurs as a substring of an already lower-cased text
        """
        return any(term in text for term in terms)


    @staticmethod
    def truncate_excerpt(text: str, max_length: int = 300, suffix: str = "...") -> str:
        """
        Cut text to max_length characters and append suffix when anything was removed
        """
        if (len(text) <= max_length):
            return text

        return text[:max_length] + suffix


    @staticmethod
    def get_text_statistics(text: str) -> Dict[str, Any]:
        """
        Basic size statistics for a document

        Returns:
        --------
            { dict }    : Character, word, sentence and paragraph counts
        """
        words = text.split()

        return {"character_count" : len(text),
                "word_count"      : len(words),
                "sentence_count"  : len(TextProcessor.split_into_sentences(text)),
                "paragraph_count" : len(TextProcessor.split_into_paragraphs(text)),
               }

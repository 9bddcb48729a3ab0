from cba_search import CorpusIndex, Document, EntityRecord
from cba_search.chunking import split_sections


if __name__ == "__main__":
    article = Document(
        id="article-11",
        title="Article XI: Free Agency",
        content="## Section 1. Restricted Free Agency\nA qualifying offer makes a player a restricted free agent.",
    )
    index = CorpusIndex(
        guide=[Document(id="guide-0", title="Bird Rights", content="A qualifying veteran free agent keeps Bird rights.")],
        faq=[],
        primary=[article],
        entities=[EntityRecord(name="Mark Williams", team="CHA", games=10, points=120)],
    )
    result = index.search("How do Bird rights work?")
    print(
        {
            "sections": len(split_sections(article)),
            "sources": result.source_labels(),
            "context_chars": len(result.context),
            "entity_block": bool(index.match_entities("Williams")),
        }
    )

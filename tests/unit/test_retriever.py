"""
교차 사건 키워드 검색 단위 테스트
"""
import pytest
from src.rag.retriever import RelevanceRetriever
from src.utils.constants import RETRIEVAL_HEADER


@pytest.fixture
def retriever():
    return RelevanceRetriever(min_keyword_length=3, min_score=1, max_snippets=2, snippet_chars=200)


class TestKeywordExtraction:
    """키워드 추출 테스트"""

    @pytest.mark.unit
    def test_keywords_are_lowercased_filtered_and_deduplicated(self, retriever):
        keywords = retriever.extract_keywords("Breach of the CONTRACT and breach damages")
        assert keywords == ["breach", "contract", "damages"]

    @pytest.mark.unit
    @pytest.mark.parametrize("question", ["hi", "is it ok", "", "   "])
    def test_question_without_long_tokens_returns_empty(self, retriever, make_case, question):
        corpus = [make_case("case-1", "hi is it ok", facts="hi is it ok")]
        assert retriever.retrieve(corpus, None, question) == ""


class TestRetrieve:
    """발췌 검색 테스트"""

    @pytest.mark.unit
    def test_end_to_end_returns_only_relevant_case(self, retriever, make_case):
        case_a = make_case(
            "case-a", "Contract breach damages",
            facts="What happened: the supplier failed to deliver and the buyer sued for breach.",
            conclusion="Damages were awarded."
        )
        case_b = make_case(
            "case-b", "Criminal bail hearing",
            facts="The accused sought bail pending trial.",
            conclusion="Bail granted."
        )
        case_c = make_case(
            "case-c", "Active breach damages matter",
            facts="What happened with the breach damages is the active case."
        )

        result = retriever.retrieve([case_a, case_b, case_c], "case-c", "What happened with the breach damages?")

        assert result.startswith(RETRIEVAL_HEADER)
        assert 'From case "Contract breach damages"' in result
        assert "Criminal bail hearing" not in result
        assert "Active breach damages matter" not in result

    @pytest.mark.unit
    def test_excluded_case_is_never_scored(self, retriever, make_case):
        only = make_case("case-1", "breach contract damages", facts="breach contract damages")
        assert retriever.retrieve([only], "case-1", "breach contract damages") == ""

    @pytest.mark.unit
    def test_single_keyword_match_is_not_relevant(self, retriever, make_case):
        weak = make_case("case-1", "Breach only", facts="Nothing else here.")
        assert retriever.retrieve([weak], None, "breach of contract remedies") == ""

    @pytest.mark.unit
    def test_higher_score_comes_first(self, retriever, make_case):
        three = make_case("case-3", "Three match", facts="alpha bravo charlie")
        five = make_case("case-5", "Five match", facts="alpha bravo charlie delta echo")

        result = retriever.retrieve([three, five], None, "alpha bravo charlie delta echo")

        assert result.index('"Five match"') < result.index('"Three match"')

    @pytest.mark.unit
    def test_at_most_two_snippets(self, retriever, make_case):
        corpus = [
            make_case(f"case-{i}", f"Matter {i}", facts="alpha bravo charlie")
            for i in range(4)
        ]
        result = retriever.retrieve(corpus, None, "alpha bravo charlie")
        assert result.count("From case") == 2
        assert '"Matter 0"' in result and '"Matter 1"' in result

    @pytest.mark.unit
    def test_equal_scores_keep_corpus_order(self, retriever, make_case):
        first = make_case("case-x", "First matter", facts="alpha bravo")
        second = make_case("case-y", "Second matter", facts="alpha bravo")

        result = retriever.retrieve([first, second], None, "alpha bravo")

        assert result.index('"First matter"') < result.index('"Second matter"')

    @pytest.mark.unit
    def test_keywords_match_as_substrings(self, retriever, make_case):
        case = make_case("case-1", "Repeated breaches", facts="Contractual obligations ignored.")
        ranked = retriever.rank([case], None, retriever.extract_keywords("breach contract"))
        assert len(ranked) == 1
        assert ranked[0].score == 2

    @pytest.mark.unit
    def test_snippet_is_truncated_to_200_characters(self, retriever, make_case):
        case = make_case(
            "case-1", "Long matter",
            facts="alpha bravo " + "f" * 400,
            conclusion="c" * 400
        )
        result = retriever.retrieve([case], None, "alpha bravo")

        expected_facts = ("alpha bravo " + "f" * 400)[:200]
        assert f"...{expected_facts}...\n" in result
        assert "f" * 201 not in result
        assert "...{}...".format("c" * 200) in result
        assert "c" * 201 not in result

    @pytest.mark.unit
    def test_only_name_facts_and_conclusion_are_searched(self, retriever, make_case):
        case = make_case(
            "case-1", "Unrelated name",
            facts="Nothing here.",
            jurisdiction="alpha bravo court"
        )
        assert retriever.retrieve([case], None, "alpha bravo") == ""

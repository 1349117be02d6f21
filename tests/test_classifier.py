from whatcard.nlp.classifier import category_for_benefit, guess_category


def test_guess_category_matches_keywords_case_insensitively() -> None:
    assert guess_category("STARBUCKS #1234") == "Dining"
    assert guess_category("Delta Air Lines") == "Travel"
    assert guess_category("Whole Foods Market") == "Groceries"
    assert guess_category("CVS Pharmacy") == "Drugstore"
    assert guess_category("Netflix.com") == "Streaming"
    assert guess_category("Amazon.com") == "Shopping"


def test_guess_category_earlier_table_entries_win() -> None:
    # "eats" (Dining) is checked before "uber" (Travel)
    assert guess_category("Uber Eats") == "Dining"
    # "apple" is a Streaming keyword and Streaming precedes Shopping
    assert guess_category("Apple Store") == "Streaming"


def test_guess_category_returns_none_without_match() -> None:
    assert guess_category("Zzyzx Hardware") is None
    assert guess_category("") is None


def test_category_for_benefit() -> None:
    assert category_for_benefit("Resy Credit") == "Dining"
    assert category_for_benefit("Uber Cash") == "Travel"
    assert category_for_benefit("Annual Travel Credit") == "Travel"
    assert category_for_benefit("Saks Credit") == "Shopping"
    assert category_for_benefit("Digital Entertainment Credit") == "Streaming"
    assert category_for_benefit("Dunkin' Credit") == "Other"

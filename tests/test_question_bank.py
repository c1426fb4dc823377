from boardprep.question_bank import QuestionBank


def _write(path, text):
    path.write_text(text, encoding="utf-8")


def test_loads_csv_files_per_category(tmp_path) -> None:
    _write(
        tmp_path / "physics.csv",
        "id,question_text,options,correct_answer_index,explanation,image_url\n"
        "p1,Unit of force?,Joule|Watt|Newton|Pascal,2,It is the Newton.,\n"
        "p2,Unit of current?,Volt|Ampere,1,,/img/circuit.png\n",
    )
    _write(
        tmp_path / "organic_chemistry.csv",
        "id,question_text,options,correct_answer_index\n"
        "c1,Simplest alkane?,Methane|Ethane|Propane,0\n",
    )

    bank = QuestionBank(str(tmp_path))

    assert [c.slug for c in bank.get_categories()] == ["organic_chemistry", "physics"]
    physics = bank.get_category("physics")
    assert physics.name == "Physics"
    assert physics.description.startswith("Test your knowledge")
    assert physics.count == 2
    assert bank.get_category("organic_chemistry").name == "Organic Chemistry"

    questions = bank.get_questions("physics")
    assert [q.id for q in questions] == ["p1", "p2"]
    assert questions[0].options == ["Joule", "Watt", "Newton", "Pascal"]
    assert questions[0].image_url is None
    assert questions[1].image_url == "/img/circuit.png"
    assert bank.get_question("c1").category == "organic_chemistry"


def test_invalid_rows_and_files_are_skipped(tmp_path) -> None:
    _write(
        tmp_path / "physics.csv",
        "id,question_text,options,correct_answer_index\n"
        "p1,Good?,Yes|No,0\n"
        "p2,One option?,Only,0\n"
        "p3,Bad index?,Yes|No,5\n"
        "p4,Not a number?,Yes|No,x\n"
        "p1,Duplicate?,Yes|No,1\n",
    )
    _write(tmp_path / "broken.csv", "word,translation\nHund,dog\n")

    bank = QuestionBank(str(tmp_path))

    assert [q.id for q in bank.get_questions("physics")] == ["p1"]
    assert bank.get_question("p1").question_text == "Good?"
    assert bank.get_category("broken") is None


def test_falls_back_to_sample_bank(tmp_path) -> None:
    bank = QuestionBank(str(tmp_path / "missing"))

    slugs = {c.slug for c in bank.get_categories()}
    assert slugs == {"physics", "chemistry", "biology", "mathematics", "history", "geography"}
    assert all(c.count > 0 for c in bank.get_categories())
    assert bank.get_question("phy-1").options[2] == "Newton"


def test_get_questions_returns_a_copy(tmp_path) -> None:
    bank = QuestionBank(str(tmp_path))
    questions = bank.get_questions("physics")
    questions.clear()
    assert bank.get_questions("physics")
    assert bank.get_questions("unknown") == []

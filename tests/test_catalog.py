import pytest

from catalog import list_all_courses, list_courses_by_major, list_majors
from data_loader import load_catalog
from errors import NotFoundError

CSV = """major,id,name,credits,instructor
Computer Science,1,Intro to Programming,3,Dr. Johnson
Computer Science,2,Data Structures,4.0,
Mathematics,10,Calculus I,4,Dr. Petrova
Computer Science, 3 , Databases ,,Dr. Rodriguez
,99,Orphan,3,
"""


@pytest.fixture
def catalog_path(tmp_path):
    path = tmp_path / "courses.csv"
    path.write_text(CSV, encoding="utf-8")
    return str(path)


@pytest.fixture
def catalog(catalog_path):
    return load_catalog(catalog_path)


class TestLoadCatalog:
    def test_majors_in_file_order(self, catalog):
        assert catalog["majors"] == ["Computer Science", "Mathematics"]

    def test_rows_without_major_skipped(self, catalog):
        assert catalog["course_count"] == 4

    def test_courses_grouped_and_ordered(self, catalog):
        ids = [c["id"] for c in catalog["courses_by_major"]["Computer Science"]]
        assert ids == [1, 2, 3]

    def test_types_are_json_safe(self, catalog):
        course = catalog["courses_by_major"]["Computer Science"][1]
        assert course["id"] == 2 and type(course["id"]) is int
        assert course["credits"] == 4 and type(course["credits"]) is int
        assert course["instructor"] is None

    def test_strings_trimmed(self, catalog):
        course = catalog["courses_by_major"]["Computer Science"][2]
        assert course["name"] == "Databases"
        assert course["credits"] is None

    def test_major_column_not_in_records(self, catalog):
        assert "major" not in catalog["courses_by_major"]["Mathematics"][0]

    def test_missing_column(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("major,name\nCS,Intro\n", encoding="utf-8")
        with pytest.raises(ValueError, match="missing column"):
            load_catalog(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_catalog(str(tmp_path / "nope.csv"))

    def test_duplicate_ids_warned(self, tmp_path, capsys):
        path = tmp_path / "dup.csv"
        path.write_text("major,id,name\nCS,1,A\nMath,1,B\n", encoding="utf-8")
        load_catalog(str(path))
        assert "[WARN]" in capsys.readouterr().out


class TestCatalogAccess:
    def test_list_majors(self, catalog):
        assert list_majors(catalog) == ["Computer Science", "Mathematics"]

    def test_all_courses_flattened_with_major(self, catalog):
        courses = list_all_courses(catalog)
        assert [(c["major"], c["id"]) for c in courses] == [
            ("Computer Science", 1),
            ("Computer Science", 2),
            ("Computer Science", 3),
            ("Mathematics", 10),
        ]

    def test_all_courses_does_not_mutate_catalog(self, catalog):
        list_all_courses(catalog)
        assert "major" not in catalog["courses_by_major"]["Computer Science"][0]

    def test_by_major(self, catalog):
        assert [c["id"] for c in list_courses_by_major(catalog, "Mathematics")] == [10]

    @pytest.mark.parametrize("name", ["Nonexistent", "mathematics", ""])
    def test_unknown_major(self, catalog, name):
        with pytest.raises(NotFoundError, match="Major not found"):
            list_courses_by_major(catalog, name)

    def test_repo_catalog_loads(self):
        import os
        path = os.path.join(os.path.dirname(__file__), "..", "data", "courses.csv")
        repo_catalog = load_catalog(path)
        assert len(repo_catalog["majors"]) == 5
        assert repo_catalog["course_count"] == 20

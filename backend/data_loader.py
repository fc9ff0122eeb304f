import pandas as pd


_REQUIRED_COLUMNS = ("major", "id", "name")
_INT_COLUMNS = ("id", "credits")


def _safe_int_col(df: pd.DataFrame, col: str) -> pd.DataFrame:
    """Coerce a numeric column to Python int, leaving blanks and junk as None.

    Handles: 3, 3.0, "3", " 3 ". Non-integral values ("3.5") are kept as-is so
    they survive to the client rather than being silently rounded.
    """
    def _coerce(x):
        if pd.isna(x):
            return None
        try:
            num = float(str(x).strip())
        except ValueError:
            return str(x).strip() or None
        return int(num) if num.is_integer() else num

    if col in df.columns:
        # Build as object dtype so None is not re-coerced to NaN (and ints to float).
        df[col] = pd.Series([_coerce(x) for x in df[col]], index=df.index, dtype=object)
    return df


def _course_records(df: pd.DataFrame) -> list[dict]:
    # Convert to object dtype so None survives instead of being re-coerced to NaN.
    df = df.astype(object).where(pd.notna(df), None)
    return df.to_dict(orient="records")


def load_catalog(catalog_path: str) -> dict:
    """Load the static course catalog CSV. Raises on file/schema errors.

    One row per course; the `major` column assigns it to a major. Majors and
    courses keep file order.
    """
    courses_df = pd.read_csv(catalog_path, dtype=str, keep_default_na=True)
    courses_df.columns = [str(c).strip() for c in courses_df.columns]

    missing = [c for c in _REQUIRED_COLUMNS if c not in courses_df.columns]
    if missing:
        raise ValueError(f"Catalog {catalog_path} is missing column(s): {missing}")

    # Ensure string columns are clean
    for col in courses_df.columns:
        if col not in _INT_COLUMNS:
            courses_df[col] = courses_df[col].where(
                courses_df[col].isna(), courses_df[col].astype(str).str.strip()
            )
    for col in _INT_COLUMNS:
        courses_df = _safe_int_col(courses_df, col)

    usable = courses_df["major"].notna() & (courses_df["major"] != "") & courses_df["id"].notna()
    dropped = int((~usable).sum())
    if dropped:
        print(f"[WARN] {dropped} catalog row(s) without a major or id were skipped.")
    courses_df = courses_df[usable]

    # ── Startup data integrity checks ──────────────────────────────────────
    dup_ids = courses_df.loc[courses_df["id"].duplicated(keep=False), "id"].unique().tolist()
    if dup_ids:
        print(f"[WARN] {len(dup_ids)} course id(s) appear more than once in the catalog: {sorted(dup_ids, key=str)}")

    majors = [str(m) for m in pd.unique(courses_df["major"])]
    courses_by_major: dict[str, list[dict]] = {}
    for major in majors:
        rows = courses_df[courses_df["major"] == major].drop(columns=["major"])
        courses_by_major[major] = _course_records(rows)

    return {
        "majors": majors,
        "courses_by_major": courses_by_major,
        "course_count": len(courses_df),
    }

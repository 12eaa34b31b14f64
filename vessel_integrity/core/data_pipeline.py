# data_pipeline.py
import pandas as pd
from fuzzywuzzy import process
import re
import numpy as np

from vessel_integrity.core.models import ThicknessReading, normalize_nozzle_id, parse_component_kind


# COLUMN_MAPPING SECTION
# ------------------------------------------------------------------------
# Canonical column names for one thickness monitoring location
STANDARD_COLUMNS = [
    "cml_number",
    "component_type",
    "location",
    "nozzle_id",
    "tml_1",
    "tml_2",
    "tml_3",
    "tml_4",
    "nominal_thickness",
    "previous_thickness",
    "actual_thickness",
    "minimum_thickness",
]

NUMERIC_COLUMNS = [
    "tml_1", "tml_2", "tml_3", "tml_4",
    "nominal_thickness", "previous_thickness", "actual_thickness", "minimum_thickness",
]

THICKNESS_COLUMNS = ["actual_thickness", "tml_1", "tml_2", "tml_3", "tml_4"]

# ------------------------------------------------------------------------
# Common alternative names for each standard column
COLUMN_VARIANTS = {
    "cml_number": ["CML", "CML No.", "cml #", "TML", "TML No.", "tml id", "point", "location id"],
    "component_type": ["component", "component type", "part", "section", "vessel component"],
    "location": ["description", "location description", "position", "elevation"],
    "nozzle_id": ["nozzle", "nozzle no.", "nozzle mark", "mark", "connection"],
    "tml_1": ["0°", "0 deg", "north", "n", "top", "reading 1", "tml1"],
    "tml_2": ["90°", "90 deg", "east", "e", "reading 2", "tml2"],
    "tml_3": ["180°", "180 deg", "south", "s", "bottom", "reading 3", "tml3"],
    "tml_4": ["270°", "270 deg", "west", "w", "reading 4", "tml4"],
    "nominal_thickness": ["nominal", "t nom", "nom. thk", "original thickness", "nominal wall"],
    "previous_thickness": ["previous", "prev. thk", "last reading", "prior thickness", "previous reading"],
    "actual_thickness": ["actual", "current", "measured", "act. thk", "current reading", "t actual", "min reading"],
    "minimum_thickness": ["t min", "tmin", "required thickness", "min. req. thk", "retirement thickness"],
}

# ------------------------------------------------------------------------
# Known direct mappings from inspection-sheet headers to standard names
KNOWN_MAPPINGS = {
    "CML #": "cml_number",
    "Comp.": "component_type",
    "t-nom": "nominal_thickness",
    "t-prev": "previous_thickness",
    "t-act": "actual_thickness",
    "t-min": "minimum_thickness",
}

# ------------------------------------------------------------------------
# Columns that must be present (after mapping) for downstream processing
REQUIRED_COLUMNS = [
    "component_type",
    "actual_thickness",
]


def clean_column_name(col_name):
    """Clean column name for better matching"""
    cleaned = str(col_name).lower().strip()
    cleaned = re.sub(r'[_\-\.#]', ' ', cleaned)
    cleaned = re.sub(r'\s+', ' ', cleaned)
    return cleaned.strip()


def suggest_column_mapping(df):
    """
    Suggest a mapping from each STANDARD_COLUMN to the best candidate
    in df.columns, using:
      1. Exact match
      2. KNOWN_MAPPINGS
      3. COLUMN_VARIANTS
      4. Fuzzy matching (score > 80 on cleaned names, > 85 on raw names)

    Returns:
        mapping: dict where keys are STANDARD_COLUMNS and values are
                 the matched column from df.columns, or None if no match.
    """
    file_columns = [str(col) for col in df.columns]
    mapping = {}
    used_columns = set()

    for std_col in STANDARD_COLUMNS:
        # 1. Exact match
        if std_col in file_columns and std_col not in used_columns:
            mapping[std_col] = std_col
            used_columns.add(std_col)
            continue

        # 2. Known inspection-sheet headers
        for alt_name, target in KNOWN_MAPPINGS.items():
            if target != std_col:
                continue
            match = next((c for c in file_columns
                          if c not in used_columns and c.lower() == alt_name.lower()), None)
            if match:
                mapping[std_col] = match
                used_columns.add(match)
                break
        if std_col in mapping:
            continue

        # 3. Variants, compared on cleaned names
        for variant in COLUMN_VARIANTS.get(std_col, []):
            match = next((c for c in file_columns
                          if c not in used_columns and clean_column_name(c) == clean_column_name(variant)), None)
            if match:
                mapping[std_col] = match
                used_columns.add(match)
                break
        if std_col in mapping:
            continue

        # 4. Fuzzy matching fallback
        available_columns = [col for col in file_columns if col not in used_columns]
        mapping[std_col] = None
        if not available_columns:
            continue

        cleaned_available = [(clean_column_name(col), col) for col in available_columns]
        match, score = process.extractOne(clean_column_name(std_col), [c[0] for c in cleaned_available])
        if score and score > 80:
            for cleaned, original in cleaned_available:
                if cleaned == match:
                    mapping[std_col] = original
                    used_columns.add(original)
                    break
        else:
            match, score = process.extractOne(std_col, available_columns)
            if score and score > 85:
                mapping[std_col] = match
                used_columns.add(match)

    return mapping


def apply_column_mapping(df, mapping):
    """
    Build a new DataFrame holding only the mapped standard columns.
    The original index is preserved.
    """
    renamed_df = pd.DataFrame(index=df.index)

    for std_col, file_col in mapping.items():
        if file_col is not None and file_col in df.columns:
            renamed_df[std_col] = df[file_col]

    return renamed_df


def get_missing_required_columns(mapping):
    """
    Identify which REQUIRED_COLUMNS are not mapped (i.e., mapping[col] is None).
    """
    return [col for col in REQUIRED_COLUMNS if mapping.get(col) is None]


def process_tml_data(df):
    """
    Clean a mapped TML table.

    - blank strings become NaN
    - thickness columns are coerced to numbers (unparseable values become NaN)
    - component tags are normalised to 'shell', 'east_head', 'west_head' or 'nozzle'
    - nozzle ids are carried as strings; numeric ids read as floats (1.0) become '1'

    Raises:
    - ValueError if a component tag is not recognised
    """
    df_view = df.copy()

    # object columns on pandas 2, str columns on pandas 3
    string_cols = [col for col in df_view.columns
                   if pd.api.types.is_object_dtype(df_view[col]) or pd.api.types.is_string_dtype(df_view[col])]
    df_view[string_cols] = df_view[string_cols].replace(r'^\s*$', np.nan, regex=True)

    existing_numeric_cols = [col for col in NUMERIC_COLUMNS if col in df_view.columns]
    if existing_numeric_cols:
        df_view[existing_numeric_cols] = df_view[existing_numeric_cols].apply(pd.to_numeric, errors='coerce')

    if "component_type" in df_view.columns:
        df_view["component_type"] = df_view["component_type"].map(
            lambda tag: parse_component_kind(None if pd.isna(tag) else tag).value
        )
    else:
        df_view["component_type"] = "shell"

    if "nozzle_id" in df_view.columns:
        df_view["nozzle_id"] = df_view["nozzle_id"].map(lambda v: None if pd.isna(v) else normalize_nozzle_id(v))

    return df_view.reset_index(drop=True)


def validate_tml_data(df):
    """
    Validate that a processed TML table can feed the aggregation pipeline.
    """
    errors = []

    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        errors.append(f"TML data missing columns: {missing}")

    thickness_cols = [col for col in THICKNESS_COLUMNS if col in df.columns]
    if thickness_cols:
        no_reading = df[df[thickness_cols].isna().all(axis=1)]
        if not no_reading.empty:
            errors.append(f"{len(no_reading)} locations have no thickness reading")

        negative = df[(df[thickness_cols] < 0).any(axis=1)]
        if not negative.empty:
            errors.append(f"{len(negative)} locations have negative thickness readings")

    if errors:
        raise ValueError("TML data validation failed:\n" + "\n".join(errors))

    return True


def readings_from_dataframe(df):
    """Convert a processed TML table into ThicknessReading records."""
    readings = []
    for row in df.to_dict(orient='records'):
        values = {col: (None if pd.isna(row[col]) else row[col])
                  for col in STANDARD_COLUMNS if col in row}
        if values.get("cml_number") is not None:
            values["cml_number"] = str(values["cml_number"])
        readings.append(ThicknessReading(**values))
    return readings


def readings_to_dataframe(readings):
    """Tabular view of ThicknessReading records, one row per location."""
    rows = []
    for reading in readings:
        row = {col: getattr(reading, col) for col in STANDARD_COLUMNS}
        row["component_type"] = reading.component_type.value
        rows.append(row)
    return pd.DataFrame(rows, columns=STANDARD_COLUMNS)

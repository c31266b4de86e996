"""
바이오마커 카탈로그 (reference/biomarker_catalog)
-----------------------------------------------------
- 검사결과지 라인 매칭과 사용자 탐색에 쓰이는 정적 바이오마커 정의 테이블입니다.
- 각 정의는 안정 키(id), 표시명, 분류, 기본 단위, 다국어 별칭, 참고 범위를 가집니다.

주의사항
- 테이블 선언 순서가 매칭 결과를 결정합니다 (첫 번째 매칭 우선).
  항목 추가 시 일반적인 별칭을 가진 항목이 더 구체적인 항목을 가리지 않는지 확인하세요.
- 저장된 레코드는 인덱스가 아닌 id(예: "hscrp")로 정의를 참조합니다.
  따라서 순서 변경/삽입은 기존 저장 데이터를 깨뜨리지 않습니다.
- 참고 범위는 결과에 실어 보낼 뿐, 후보를 거르는 데 사용하지 않습니다.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class BiomarkerUnit(str, Enum):
    """바이오마커 단위 어휘"""
    MG_DL = "mg/dL"
    MG_L = "mg/L"
    MMOL_L = "mmol/L"
    NMOL_L = "nmol/L"
    NG_ML = "ng/mL"
    IU_L = "IU/L"
    PG_ML = "pg/mL"
    MIU_L = "mIU/L"
    UIU_ML = "uIU/mL"
    UMOL_L = "umol/L"
    GIGA_L = "G/L"
    TERA_L = "T/L"
    G_L = "g/L"
    FL = "fL"
    PG = "pg"
    MM_HOUR = "mm/h"
    ML_MIN_173 = "mL/min/1.73m2"
    LEU_UL = "Leu/uL"
    L_L = "L/L"
    PERCENT = "%"


class BiomarkerCategory(str, Enum):
    """바이오마커 분류"""
    LIPIDS = "Lipids"
    HORMONES = "Hormones"
    VITAMINS = "Vitamins"
    INFLAMMATION = "Inflammation"
    METABOLIC = "Metabolic"
    THYROID = "Thyroid"
    HEMATOLOGY = "Hematology"
    KIDNEY = "Kidney"
    LIVER = "Liver"
    ELECTROLYTES = "Electrolytes"


@dataclass(frozen=True)
class BiomarkerDefinition:
    """카탈로그 항목 (불변)"""

    id: str
    name: str
    category: BiomarkerCategory
    default_unit: BiomarkerUnit
    aliases: Tuple[str, ...] = ()
    min_reference: Optional[float] = None
    max_reference: Optional[float] = None

    def to_dict(self) -> dict:
        """딕셔너리로 변환"""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "default_unit": self.default_unit.value,
            "aliases": list(self.aliases),
            "min_reference": self.min_reference,
            "max_reference": self.max_reference,
        }


def _d(
    key: str,
    name: str,
    category: BiomarkerCategory,
    unit: BiomarkerUnit,
    aliases: Tuple[str, ...] = (),
    ref: Optional[Tuple[float, float]] = None,
) -> BiomarkerDefinition:
    min_ref, max_ref = ref if ref is not None else (None, None)
    return BiomarkerDefinition(
        id=key,
        name=name,
        category=category,
        default_unit=unit,
        aliases=aliases,
        min_reference=min_ref,
        max_reference=max_ref,
    )


_C = BiomarkerCategory
_U = BiomarkerUnit

# 선언 순서 = 매칭 순서
BIOMARKER_CATALOG: Tuple[BiomarkerDefinition, ...] = (
    # Lipids
    _d("ldl", "LDL Cholesterol", _C.LIPIDS, _U.MG_DL,
       ("LDL-koleszterin", "LDL", "Low Density Lipoprotein"), (0, 100)),
    _d("hdl", "HDL Cholesterol", _C.LIPIDS, _U.MG_DL,
       ("HDL-koleszterin", "HDL", "High Density Lipoprotein"), (40, 100)),
    _d("triglycerides", "Triglycerides", _C.LIPIDS, _U.MG_DL,
       ("Triglicerid", "Triglycerid"), (0, 150)),
    _d("total_chol", "Total Cholesterol", _C.LIPIDS, _U.MG_DL,
       ("Összkoleszterin", "Total chol."), (0, 200)),

    # Metabolic
    _d("hba1c", "HbA1c", _C.METABOLIC, _U.PERCENT,
       ("HbA1c", "HBA1C"), (4.0, 5.6)),
    _d("fasting_glucose", "Fasting Glucose", _C.METABOLIC, _U.MG_DL,
       ("Glükóz", "Glukoz", "Vércukor", "Blood Glucose", "Glucose"), (70, 99)),
    _d("insulin", "Fasting Insulin", _C.METABOLIC, _U.UIU_ML,
       ("Inzulin", "Insulin"), (2, 25)),

    # Vitamins
    _d("vitd", "Vitamin D (25-OH)", _C.VITAMINS, _U.NG_ML,
       ("D-vitamin", "25-OH Vitamin D", "25(OH)D"), (30, 100)),
    _d("b12", "Vitamin B12", _C.VITAMINS, _U.PG_ML,
       ("B12-vitamin", "Cobalamin"), (200, 900)),
    _d("folate", "Folate", _C.VITAMINS, _U.NG_ML,
       ("Folsav", "Folate"), (3, 20)),

    # Inflammation
    _d("hscrp", "High-Sensitivity C-Reactive Protein", _C.INFLAMMATION, _U.MG_L,
       ("hs-CRP", "CRP", "C-reaktív protein"), (0, 3.0)),
    _d("il6", "Interleukin-6", _C.INFLAMMATION, _U.PG_ML,
       ("IL-6",)),

    # Hormones
    _d("testosterone_total", "Testosterone (Total)", _C.HORMONES, _U.NG_ML,
       ("Tesztoszteron", "Testosterone Total"), (2.5, 9.5)),
    _d("testosterone_free", "Testosterone (Free)", _C.HORMONES, _U.PG_ML,
       ("Szabad tesztoszteron", "Free Testosterone")),
    _d("estradiol", "Estradiol (E2)", _C.HORMONES, _U.PG_ML,
       ("Ösztradiol", "Estradiol")),
    _d("dhea_s", "DHEA-S", _C.HORMONES, _U.UMOL_L,
       ("DHEA-S",)),

    # Thyroid
    _d("tsh", "TSH", _C.THYROID, _U.UIU_ML,
       ("TSH", "Tireotrop hormon"), (0.4, 4.0)),
    _d("ft3", "Free T3", _C.THYROID, _U.PG_ML,
       ("Szabad T3", "fT3")),
    _d("ft4", "Free T4", _C.THYROID, _U.NG_ML,
       ("Szabad T4", "fT4")),

    # Hematology
    _d("hemoglobin", "Hemoglobin", _C.HEMATOLOGY, _U.MG_DL,
       ("Hemoglobin", "Hgb", "Hb")),
    _d("hematocrit", "Hematocrit", _C.HEMATOLOGY, _U.PERCENT,
       ("Hematokrit", "HCT")),
    _d("ferritin", "Ferritin", _C.HEMATOLOGY, _U.NG_ML,
       ("Ferritin",), (30, 400)),

    # Kidney
    _d("creatinine", "Creatinine", _C.KIDNEY, _U.MG_DL,
       ("Kreatinin", "Creatinine"), (0.6, 1.3)),
    _d("bun", "BUN", _C.KIDNEY, _U.MG_DL,
       ("Karbamid", "Urea", "BUN"), (7, 20)),

    # Liver
    _d("alt", "ALT", _C.LIVER, _U.IU_L,
       ("ALT", "GPT", "ALAT"), (7, 56)),
    _d("ast", "AST", _C.LIVER, _U.IU_L,
       ("AST", "GOT", "ASAT"), (10, 40)),
    _d("albumin", "Albumin", _C.LIVER, _U.MG_DL,
       ("Albumin",), (3.5, 5.0)),

    # Electrolytes
    _d("sodium", "Sodium", _C.ELECTROLYTES, _U.MMOL_L,
       ("Nátrium", "Sodium"), (135, 145)),
    _d("potassium", "Potassium", _C.ELECTROLYTES, _U.MMOL_L,
       ("Kálium", "Potassium"), (3.5, 5.1)),
)

_BY_ID: Dict[str, BiomarkerDefinition] = {d.id: d for d in BIOMARKER_CATALOG}


def get_biomarker_catalog() -> Tuple[BiomarkerDefinition, ...]:
    """전체 카탈로그 (선언 순서)"""
    return BIOMARKER_CATALOG


def find_definition(key: Optional[str]) -> Optional[BiomarkerDefinition]:
    """안정 키(id)로 정의 조회. 없으면 None"""
    if not key:
        return None
    return _BY_ID.get(key.strip())


def list_all_keys() -> list[str]:
    """모든 안정 키 (선언 순서)"""
    return [d.id for d in BIOMARKER_CATALOG]


__all__ = [
    "BiomarkerUnit",
    "BiomarkerCategory",
    "BiomarkerDefinition",
    "BIOMARKER_CATALOG",
    "get_biomarker_catalog",
    "find_definition",
    "list_all_keys",
]

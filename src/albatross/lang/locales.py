"""Locale tag to ISO 639-3 language code table.

Keys are the lowercase locale tags reported by Minecraft clients (1.19 and
later). Regional variants share their language's file. Tags without an
ISO 639-3 code of their own map to the closest language:

- Andalusian (esan) and Valencian (val_es) use Spanish.
- Joke languages use the language they are based on (LOLCAT, Pirate and
  Upside-down English use English; Russian pre-revolutionary uses Russian).
- Anglish (enws) uses English.
- Interslavic (isv) and Brabantian (brb) use private-use codes.
"""

LOCALE_LANGUAGE_CODES: dict[str, str] = {
    "af_za": "afr",
    "ar_sa": "ara",
    "ast_es": "ast",
    "az_az": "aze",
    "ba_ru": "bak",
    "bar": "bar",
    "be_by": "bel",
    "bg_bg": "bul",
    "br_fr": "bre",
    "brb": "qbr",
    "bs_ba": "bos",
    "ca_es": "cat",
    "cs_cz": "ces",
    "cy_gb": "cym",
    "da_dk": "dan",
    "de_at": "bar",
    "de_ch": "gsw",
    "de_de": "deu",
    "el_gr": "ell",
    "en_au": "eng",
    "en_ca": "eng",
    "en_gb": "eng",
    "en_nz": "eng",
    "en_pt": "eng",
    "en_ud": "eng",
    "en_us": "eng",
    "enp": "eng",
    "enws": "eng",
    "eo_uy": "epo",
    "es_ar": "spa",
    "es_cl": "spa",
    "es_ec": "spa",
    "es_es": "spa",
    "es_mx": "spa",
    "es_uy": "spa",
    "es_ve": "spa",
    "esan": "spa",
    "et_ee": "est",
    "eu_es": "eus",
    "fa_ir": "fas",
    "fi_fi": "fin",
    "fil_ph": "fil",
    "fo_fo": "fao",
    "fr_ca": "fra",
    "fr_fr": "fra",
    "fra_de": "vmf",
    "fur_it": "fur",
    "fy_nl": "fry",
    "ga_ie": "gle",
    "gd_gb": "gla",
    "gl_es": "glg",
    "haw_us": "haw",
    "he_il": "heb",
    "hi_in": "hin",
    "hr_hr": "hrv",
    "hu_hu": "hun",
    "hy_am": "hye",
    "id_id": "ind",
    "ig_ng": "ibo",
    "io_en": "ido",
    "is_is": "isl",
    "isv": "qis",
    "it_it": "ita",
    "ja_jp": "jpn",
    "jbo_en": "jbo",
    "ka_ge": "kat",
    "kk_kz": "kaz",
    "kn_in": "kan",
    "ko_kr": "kor",
    "ksh": "ksh",
    "kw_gb": "cor",
    "la_la": "lat",
    "lb_lu": "ltz",
    "li_li": "lim",
    "lmo": "lmo",
    "lol_us": "eng",
    "lt_lt": "lit",
    "lv_lv": "lav",
    "lzh": "lzh",
    "mk_mk": "mkd",
    "mn_mn": "mon",
    "ms_my": "zlm",
    "mt_mt": "mlt",
    "nds_de": "nds",
    "nl_be": "nld",
    "nl_nl": "nld",
    "nn_no": "nno",
    "no_no": "nob",
    "oc_fr": "oci",
    "ovd": "ovd",
    "pl_pl": "pol",
    "pt_br": "por",
    "pt_pt": "por",
    "qya_aa": "qya",
    "ro_ro": "ron",
    "rpr": "rus",
    "ru_ru": "rus",
    "se_no": "sme",
    "sk_sk": "slk",
    "sl_si": "slv",
    "so_so": "som",
    "sq_al": "sqi",
    "sr_sp": "srp",
    "sv_se": "swe",
    "sxu": "sxu",
    "szl": "szl",
    "ta_in": "tam",
    "th_th": "tha",
    "tl_ph": "tgl",
    "tlh_aa": "tlh",
    "tok": "tok",
    "tr_tr": "tur",
    "tt_ru": "tat",
    "uk_ua": "ukr",
    "val_es": "spa",
    "vec_it": "vec",
    "vi_vn": "vie",
    "yi_de": "yid",
    "yo_ng": "yor",
    "zh_cn": "zho",
    "zh_hk": "zho",
    "zh_tw": "zho",
    "zlm_arab": "zlm",
}


def normalize_locale(locale: str) -> str:
    """Normalize a locale tag for lookup ("en-US" -> "en_us")."""
    return locale.strip().lower().replace("-", "_")

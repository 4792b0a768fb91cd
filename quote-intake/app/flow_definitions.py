"""Built-in question flows for the Quote Intake tool.

Each branch is the question set for one case type (or, for family cases,
one side of the inside/outside the U.S. split). Labels are bilingual.
CASE_TYPES is the picker used when the case-type API cannot be reached.

Part of the LinkToLawyers intake suite.
"""

from __future__ import annotations

from app.schema import (
    DATE,
    LONG_TEXT,
    MULTI_CHOICE,
    SHORT_TEXT,
    SINGLE_CHOICE,
    Branch,
    CaseType,
    Condition,
    FieldDefinition,
    Option,
)

DEFAULT_BRANCH_ID = "other"

# Values the case-type API and older links still send
BRANCH_ALIASES: dict[str, str] = {
    "asylum-affirmative": "asylum",
    "citizenship-naturalization-n400": "naturalization",
    "inside": "family-inside-us",
    "outside": "family-outside-us",
}

# Case types that need the inside/outside question before a branch is known
LOCATION_SPLIT_CASE_TYPES = ("family",)

# Server case-type categories whose questions match a built-in branch. Case
# types in other categories fall through to the default branch.
CATEGORY_BRANCHES: dict[str, str] = {
    "Asylum": "asylum",
    "Citizenship & Naturalization": "naturalization",
    "K-1 Fiancé(e) Visa": "k1-fiance-visa",
    "Fiancé Visa": "k1-fiance-visa",
}


def _yes_no(
    yes_en: str = "Yes",
    yes_es: str = "Sí",
    no_en: str = "No",
    no_es: str = "No",
    unsure: bool = False,
) -> list[Option]:
    options = [
        Option("yes", {"en": yes_en, "es": yes_es}),
        Option("no", {"en": no_en, "es": no_es}),
    ]
    if unsure:
        options.append(Option("unsure", {"en": "I'm not sure", "es": "No estoy seguro/a"}))
    return options


# ---------------------------------------------------------------------------
# Asylum
# ---------------------------------------------------------------------------

ASYLUM_FIELDS: list[FieldDefinition] = [
    FieldDefinition(
        key="entryMethod",
        kind=LONG_TEXT,
        required=True,
        label={
            "en": "How did you come into the U.S.? (By plane, border crossing, etc.)",
            "es": "¿Cómo entró a los EE. UU.? (En avión, cruzando la frontera, etc.)",
        },
        placeholder={
            "en": "Please describe how you entered the United States...",
            "es": "Por favor describa cómo entró a los Estados Unidos...",
        },
    ),
    FieldDefinition(
        key="entryDate",
        kind=DATE,
        required=True,
        label={
            "en": "What date did you enter? Please give the date or your best guess.",
            "es": "¿En qué fecha entró? Por favor dé la fecha o su mejor estimado.",
        },
    ),
    FieldDefinition(
        key="afraidToReturn",
        kind=SINGLE_CHOICE,
        required=True,
        label={
            "en": "Do you feel afraid to go back to your home country?",
            "es": "¿Siente miedo de regresar a su país de origen?",
        },
        options=_yes_no(
            "Yes, I feel afraid to return", "Sí, siento miedo de regresar",
            "No, I do not feel afraid to return", "No, no siento miedo de regresar",
        ),
    ),
    FieldDefinition(
        key="reasonAfraid",
        kind=LONG_TEXT,
        required=True,
        visible_when=Condition("afraidToReturn", equals="yes"),
        label={
            "en": "If yes, can you tell me why?",
            "es": "Si es así, ¿puede decirme por qué?",
        },
        help_text={
            "en": "You can share as much or as little detail as you feel comfortable with at this time.",
            "es": "Puede compartir tanto o tan poco detalle como se sienta cómodo/a en este momento.",
        },
        required_message={
            "en": "Please explain why you feel afraid",
            "es": "Por favor explique por qué siente miedo",
        },
    ),
    FieldDefinition(
        key="inRemovalProceedings",
        kind=SINGLE_CHOICE,
        required=True,
        label={
            "en": "Has the U.S. government sent you to immigration court or removal (deportation) proceedings?",
            "es": "¿El gobierno de EE. UU. lo ha enviado a corte de inmigración o a un proceso de deportación?",
        },
        options=_yes_no(
            "Yes, I am in removal proceedings", "Sí, estoy en proceso de deportación",
            "No, I am not in removal proceedings", "No, no estoy en proceso de deportación",
            unsure=True,
        ),
    ),
]


# ---------------------------------------------------------------------------
# Family immigration: inside / outside the U.S.
# ---------------------------------------------------------------------------

_QUALIFYING_FAMILY_LABEL = {
    "en": (
        "Do you have a close family member who can help you? This means a U.S. citizen "
        "or green card holder who is your husband or wife, parent, or child who is 21 or older."
    ),
    "es": (
        "¿Tiene un familiar cercano que pueda ayudarle? Es decir, un ciudadano estadounidense "
        "o residente permanente que sea su esposo/a, padre/madre, o hijo/a de 21 años o más."
    ),
}

FAMILY_INSIDE_US_FIELDS: list[FieldDefinition] = [
    FieldDefinition(
        key="entryMethod",
        kind=LONG_TEXT,
        required=True,
        label={
            "en": "How did you come into the U.S.? For example, did you fly on a plane, walk across the border, or something else?",
            "es": "¿Cómo entró a los EE. UU.? Por ejemplo, ¿llegó en avión, cruzó la frontera caminando, u otra forma?",
        },
    ),
    FieldDefinition(
        key="wasInspected",
        kind=SINGLE_CHOICE,
        required=True,
        label={
            "en": "When you entered, did a U.S. officer check your passport or papers?",
            "es": "Cuando entró, ¿un oficial de EE. UU. revisó su pasaporte o documentos?",
        },
        help_text={
            "en": "This is called inspection. It means an officer looked at your ID and let you in.",
            "es": "Esto se llama inspección. Significa que un oficial revisó su identificación y le dejó entrar.",
        },
        options=_yes_no(
            "Yes, an officer checked my papers", "Sí, un oficial revisó mis documentos",
            "No, no officer checked my papers", "No, ningún oficial revisó mis documentos",
        ),
    ),
    FieldDefinition(
        key="legalStatus",
        kind=SINGLE_CHOICE,
        required=True,
        label={
            "en": "Are you still in legal status, or out of status?",
            "es": "¿Todavía tiene estatus legal, o está fuera de estatus?",
        },
        options=[
            Option("in-status", {
                "en": "In legal status (my visa/permit is still good)",
                "es": "Con estatus legal (mi visa/permiso sigue vigente)",
            }),
            Option("out-status", {
                "en": "Out of status (my visa ended or I overstayed)",
                "es": "Fuera de estatus (mi visa venció o me quedé más tiempo)",
            }),
        ],
    ),
    FieldDefinition(
        key="entryDate",
        kind=DATE,
        required=True,
        label={
            "en": "What date did you enter? Please give the date, or your best guess.",
            "es": "¿En qué fecha entró? Por favor dé la fecha, o su mejor estimado.",
        },
    ),
    FieldDefinition(
        key="visaType",
        kind=SHORT_TEXT,
        required=True,
        label={
            "en": "What kind of visa or entry did you use? Example: tourist, student, work, or no visa.",
            "es": "¿Qué tipo de visa o entrada usó? Ejemplo: turista, estudiante, trabajo, o sin visa.",
        },
        placeholder={
            "en": "e.g., tourist visa, student visa, work visa, no visa",
            "es": "ej., visa de turista, visa de estudiante, visa de trabajo, sin visa",
        },
    ),
    FieldDefinition(
        key="hasFamily",
        kind=SINGLE_CHOICE,
        required=True,
        label=_QUALIFYING_FAMILY_LABEL,
        options=_yes_no(
            "Yes, I have a qualifying family member", "Sí, tengo un familiar que califica",
            "No, I don't have a qualifying family member", "No, no tengo un familiar que califica",
        ),
    ),
    FieldDefinition(
        key="everMarried",
        kind=SINGLE_CHOICE,
        required=True,
        label={
            "en": "Have you ever been married before?",
            "es": "¿Alguna vez ha estado casado/a?",
        },
        options=_yes_no(
            "Yes, I have been married", "Sí, he estado casado/a",
            "No, I have never been married", "No, nunca he estado casado/a",
        ),
    ),
]

FAMILY_OUTSIDE_US_FIELDS: list[FieldDefinition] = [
    FieldDefinition(
        key="hasUSFamily",
        kind=SINGLE_CHOICE,
        required=True,
        label=_QUALIFYING_FAMILY_LABEL,
        options=_yes_no(
            "Yes, I have a qualifying U.S. family member", "Sí, tengo un familiar en EE. UU. que califica",
            "No, I don't have a qualifying U.S. family member", "No, no tengo un familiar en EE. UU. que califica",
        ),
    ),
    FieldDefinition(
        key="previousVisa",
        kind=LONG_TEXT,
        required=True,
        label={
            "en": "Have you ever applied for a U.S. visa before? If yes, what happened?",
            "es": "¿Alguna vez ha solicitado una visa de EE. UU.? Si es así, ¿qué pasó?",
        },
        placeholder={
            "en": "e.g., No, never applied before / Yes, approved in 2020 / Yes, denied in 2019 because...",
            "es": "ej., No, nunca he solicitado / Sí, aprobada en 2020 / Sí, negada en 2019 porque...",
        },
    ),
    FieldDefinition(
        key="legalHelp",
        kind=LONG_TEXT,
        required=True,
        label={
            "en": "What kind of legal help are you looking for right now?",
            "es": "¿Qué tipo de ayuda legal está buscando en este momento?",
        },
        placeholder={
            "en": "e.g., Help with family petition / Consular processing guidance / Appeal a denial...",
            "es": "ej., Ayuda con petición familiar / Orientación en proceso consular / Apelar una negación...",
        },
    ),
]


# ---------------------------------------------------------------------------
# Naturalization
# ---------------------------------------------------------------------------

NATURALIZATION_FIELDS: list[FieldDefinition] = [
    FieldDefinition(
        key="howGotGreenCard",
        kind=LONG_TEXT,
        required=True,
        label={
            "en": "How did you get your green card? (Example: through family, work, marriage, or something else.)",
            "es": "¿Cómo obtuvo su tarjeta verde? (Ejemplo: por familia, trabajo, matrimonio, u otra forma.)",
        },
    ),
    FieldDefinition(
        key="greenCardStartDate",
        kind=DATE,
        required=True,
        label={
            "en": "What is the start date on your green card? Please share the date printed on your card.",
            "es": "¿Cuál es la fecha de inicio en su tarjeta verde? Por favor indique la fecha impresa en su tarjeta.",
        },
    ),
    FieldDefinition(
        key="tripsOver6Months",
        kind=SINGLE_CHOICE,
        required=True,
        label={
            "en": "Since getting your green card, have you taken any trips outside the U.S. longer than 6 months?",
            "es": "Desde que obtuvo su tarjeta verde, ¿ha hecho viajes fuera de EE. UU. de más de 6 meses?",
        },
        options=_yes_no(
            "Yes, I have taken trips over 6 months", "Sí, he hecho viajes de más de 6 meses",
            "No, I have not taken trips over 6 months", "No, no he hecho viajes de más de 6 meses",
        ),
    ),
    FieldDefinition(
        key="livedHalfTime5Years",
        kind=SINGLE_CHOICE,
        required=True,
        label={
            "en": "In the last 5 years, did you live in the U.S. at least half the time?",
            "es": "En los últimos 5 años, ¿vivió en EE. UU. al menos la mitad del tiempo?",
        },
        options=_yes_no(
            "Yes, I lived in the U.S. at least half the time", "Sí, viví en EE. UU. al menos la mitad del tiempo",
            "No, I was outside the U.S. more than half the time", "No, estuve fuera de EE. UU. más de la mitad del tiempo",
        ),
    ),
    FieldDefinition(
        key="marriageRule3Years",
        kind=SINGLE_CHOICE,
        required=True,
        label={
            "en": "Have you been married to and living with a U.S. citizen for the last 3 years?",
            "es": "¿Ha estado casado/a y viviendo con un ciudadano estadounidense durante los últimos 3 años?",
        },
        options=[
            Option("yes", {
                "en": "Yes, this applies to me and I meet the requirements",
                "es": "Sí, esto me aplica y cumplo los requisitos",
            }),
            Option("no", {
                "en": "No, this does not apply to my situation",
                "es": "No, esto no aplica a mi situación",
            }),
            Option("unsure", {
                "en": "I'm not sure if this applies to me",
                "es": "No estoy seguro/a si esto me aplica",
            }),
        ],
    ),
]


# ---------------------------------------------------------------------------
# Family-based immigrant visa: immediate relative
# ---------------------------------------------------------------------------

IMMEDIATE_RELATIVE_FIELDS: list[FieldDefinition] = [
    FieldDefinition(
        key="relationship",
        kind=SINGLE_CHOICE,
        required=True,
        label={
            "en": "How is the U.S. citizen related to the person immigrating?",
            "es": "¿Qué parentesco tiene el ciudadano estadounidense con la persona que va a inmigrar?",
        },
        options=[
            Option("spouse", {"en": "Spouse", "es": "Cónyuge"}),
            Option("parent", {"en": "Parent", "es": "Padre o madre"}),
            Option("child", {"en": "Unmarried child under 21", "es": "Hijo/a soltero/a menor de 21 años"}),
            Option("other", {"en": "Other", "es": "Otro"}),
        ],
    ),
    FieldDefinition(
        key="relationshipOtherDetails",
        kind=LONG_TEXT,
        required=True,
        visible_when=Condition("relationship", equals="other"),
        label={
            "en": "Please describe the relationship.",
            "es": "Por favor describa el parentesco.",
        },
    ),
    FieldDefinition(
        key="location",
        kind=SINGLE_CHOICE,
        required=True,
        label={
            "en": "Is the person immigrating inside or outside the U.S.?",
            "es": "¿La persona que va a inmigrar está dentro o fuera de EE. UU.?",
        },
        options=[
            Option("inside", {"en": "Inside the U.S.", "es": "Dentro de EE. UU."}),
            Option("outside", {"en": "Outside the U.S.", "es": "Fuera de EE. UU."}),
        ],
    ),
    FieldDefinition(
        key="insideInspected",
        kind=SINGLE_CHOICE,
        required=True,
        visible_when=Condition("location", equals="inside"),
        label={
            "en": "Did a U.S. officer inspect them when they entered?",
            "es": "¿Un oficial de EE. UU. le inspeccionó cuando entró?",
        },
        options=_yes_no(unsure=True),
    ),
    FieldDefinition(
        key="insideEntryStatus",
        kind=SINGLE_CHOICE,
        required=True,
        visible_when=Condition("location", equals="inside"),
        label={
            "en": "How did they enter the U.S.?",
            "es": "¿Cómo entró a EE. UU.?",
        },
        options=[
            Option("visa", {"en": "With a visa", "es": "Con visa"}),
            Option("visa-waiver", {"en": "Visa waiver (ESTA)", "es": "Exención de visa (ESTA)"}),
            Option("parole", {"en": "Parole", "es": "Permiso de permanencia (parole)"}),
            Option("no-inspection", {"en": "Without inspection", "es": "Sin inspección"}),
        ],
    ),
    FieldDefinition(
        key="insideOverstay",
        kind=SINGLE_CHOICE,
        required=True,
        visible_when=Condition("location", equals="inside"),
        label={
            "en": "Have they stayed longer than their authorized stay?",
            "es": "¿Se ha quedado más tiempo del autorizado?",
        },
        options=_yes_no(unsure=True),
    ),
    FieldDefinition(
        key="outsidePriorBenefit",
        kind=LONG_TEXT,
        required=True,
        visible_when=Condition("location", equals="outside"),
        label={
            "en": "Have they ever applied for a U.S. visa or immigration benefit? What happened?",
            "es": "¿Alguna vez ha solicitado una visa o beneficio migratorio de EE. UU.? ¿Qué pasó?",
        },
    ),
    FieldDefinition(
        key="outsideHelpType",
        kind=LONG_TEXT,
        required=True,
        visible_when=Condition("location", equals="outside"),
        label={
            "en": "What kind of help are you looking for?",
            "es": "¿Qué tipo de ayuda está buscando?",
        },
    ),
]


# ---------------------------------------------------------------------------
# K-1 fiancé(e) visa
# ---------------------------------------------------------------------------

K1_FIELDS: list[FieldDefinition] = [
    FieldDefinition(
        key="metInPerson",
        kind=SINGLE_CHOICE,
        required=True,
        label={
            "en": "Have you and your fiancé(e) met in person in the last 2 years?",
            "es": "¿Usted y su prometido/a se han conocido en persona en los últimos 2 años?",
        },
        options=_yes_no(),
    ),
    FieldDefinition(
        key="relationshipDuration",
        kind=SINGLE_CHOICE,
        required=True,
        label={
            "en": "How long have you been in a relationship?",
            "es": "¿Cuánto tiempo llevan en una relación?",
        },
        options=[
            Option("under-1-year", {"en": "Less than 1 year", "es": "Menos de 1 año"}),
            Option("1-3-years", {"en": "1 to 3 years", "es": "De 1 a 3 años"}),
            Option("over-3-years", {"en": "More than 3 years", "es": "Más de 3 años"}),
        ],
    ),
    FieldDefinition(
        key="fianceLocation",
        kind=SINGLE_CHOICE,
        required=True,
        label={
            "en": "Where does your fiancé(e) live right now?",
            "es": "¿Dónde vive su prometido/a en este momento?",
        },
        options=[
            Option("home-country", {"en": "In their home country", "es": "En su país de origen"}),
            Option("third-country", {"en": "In another country", "es": "En otro país"}),
            Option("inside-us", {"en": "Inside the U.S.", "es": "Dentro de EE. UU."}),
        ],
    ),
    FieldDefinition(
        key="priorImmigrationBenefit",
        kind=SINGLE_CHOICE,
        required=True,
        label={
            "en": "Has your fiancé(e) ever applied for a U.S. visa or been denied entry?",
            "es": "¿Su prometido/a alguna vez ha solicitado una visa de EE. UU. o se le ha negado la entrada?",
        },
        options=_yes_no(),
    ),
    FieldDefinition(
        key="priorImmigrationExplanation",
        kind=LONG_TEXT,
        required=True,
        visible_when=Condition("priorImmigrationBenefit", equals="yes"),
        label={
            "en": "Please tell us what happened.",
            "es": "Por favor cuéntenos qué pasó.",
        },
    ),
]


# ---------------------------------------------------------------------------
# Removal of conditions (I-751)
# ---------------------------------------------------------------------------

REMOVAL_OF_CONDITIONS_FIELDS: list[FieldDefinition] = [
    FieldDefinition(
        key="greenCardDate",
        kind=DATE,
        required=True,
        label={
            "en": "What is the start date on your conditional green card?",
            "es": "¿Cuál es la fecha de inicio en su tarjeta verde condicional?",
        },
    ),
    FieldDefinition(
        key="maritalEvidence",
        kind=SINGLE_CHOICE,
        required=True,
        label={
            "en": "Do you have documents showing you and your spouse share a life together?",
            "es": "¿Tiene documentos que muestren que usted y su cónyuge comparten una vida juntos?",
        },
        help_text={
            "en": "For example a joint lease, bank account, taxes, or photos.",
            "es": "Por ejemplo un contrato de renta, cuenta bancaria o impuestos en conjunto, o fotos.",
        },
        options=[
            Option("plenty", {"en": "Yes, plenty of documents", "es": "Sí, muchos documentos"}),
            Option("some", {"en": "Some documents", "es": "Algunos documentos"}),
            Option("none", {"en": "Very few or none", "es": "Muy pocos o ninguno"}),
        ],
    ),
    FieldDefinition(
        key="filingType",
        kind=SINGLE_CHOICE,
        required=True,
        label={
            "en": "Will you file together with your spouse, or ask for a waiver?",
            "es": "¿Presentará junto con su cónyuge, o pedirá una exención?",
        },
        options=[
            Option("joint", {"en": "Jointly with my spouse", "es": "En conjunto con mi cónyuge"}),
            Option("waiver", {"en": "Waiver (filing alone)", "es": "Exención (presentando solo/a)"}),
            Option("unsure", {"en": "I'm not sure", "es": "No estoy seguro/a"}),
        ],
    ),
    FieldDefinition(
        key="marriageSituation",
        kind=SINGLE_CHOICE,
        required=True,
        label={
            "en": "What is the current situation of your marriage?",
            "es": "¿Cuál es la situación actual de su matrimonio?",
        },
        options=[
            Option("together", {"en": "Still married and living together", "es": "Seguimos casados y viviendo juntos"}),
            Option("separated", {"en": "Separated", "es": "Separados"}),
            Option("divorced", {"en": "Divorced or divorcing", "es": "Divorciados o en proceso de divorcio"}),
            Option("widowed", {"en": "My spouse passed away", "es": "Mi cónyuge falleció"}),
            Option("abuse", {"en": "I experienced abuse", "es": "Sufrí abuso"}),
        ],
    ),
]


# ---------------------------------------------------------------------------
# Other / default
# ---------------------------------------------------------------------------

OTHER_FIELDS: list[FieldDefinition] = [
    FieldDefinition(
        key="helpTopics",
        kind=MULTI_CHOICE,
        required=True,
        label={
            "en": "Which of these best describe what you need? Choose all that apply.",
            "es": "¿Cuáles de estas opciones describen lo que necesita? Elija todas las que apliquen.",
        },
        options=[
            Option("work-visa", {"en": "Work visa", "es": "Visa de trabajo"}),
            Option("student-visa", {"en": "Student visa", "es": "Visa de estudiante"}),
            Option("deportation-defense", {"en": "Deportation defense", "es": "Defensa contra deportación"}),
            Option("daca", {"en": "DACA", "es": "DACA"}),
            Option("green-card-renewal", {"en": "Green card renewal", "es": "Renovación de tarjeta verde"}),
            Option("other", {"en": "Something else", "es": "Otra cosa"}),
        ],
    ),
    FieldDefinition(
        key="otherTopic",
        kind=SHORT_TEXT,
        required=True,
        visible_when=Condition("helpTopics", contains="other"),
        label={
            "en": "What else do you need help with?",
            "es": "¿Con qué otra cosa necesita ayuda?",
        },
    ),
    FieldDefinition(
        key="caseDescription",
        kind=LONG_TEXT,
        required=True,
        label={
            "en": "Please describe your situation.",
            "es": "Por favor describa su situación.",
        },
    ),
]


# ---------------------------------------------------------------------------
# Branch lookup
# ---------------------------------------------------------------------------

BRANCHES: list[Branch] = [
    Branch(
        id="asylum",
        label={"en": "Asylum", "es": "Asilo"},
        description={
            "en": "You fear returning to your home country",
            "es": "Tiene miedo de regresar a su país de origen",
        },
        fields=ASYLUM_FIELDS,
    ),
    Branch(
        id="family-inside-us",
        label={"en": "Family Immigration (inside the U.S.)", "es": "Inmigración Familiar (dentro de EE. UU.)"},
        description={
            "en": "You are in the U.S. and have family who may petition for you",
            "es": "Está en EE. UU. y tiene familia que podría pedir por usted",
        },
        fields=FAMILY_INSIDE_US_FIELDS,
    ),
    Branch(
        id="family-outside-us",
        label={"en": "Family Immigration (outside the U.S.)", "es": "Inmigración Familiar (fuera de EE. UU.)"},
        description={
            "en": "You are outside the U.S. and have family who may petition for you",
            "es": "Está fuera de EE. UU. y tiene familia que podría pedir por usted",
        },
        fields=FAMILY_OUTSIDE_US_FIELDS,
    ),
    Branch(
        id="naturalization",
        label={"en": "Naturalization / Citizenship", "es": "Naturalización / Ciudadanía"},
        description={
            "en": "You have a green card and want to become a U.S. citizen",
            "es": "Tiene tarjeta verde y quiere hacerse ciudadano estadounidense",
        },
        fields=NATURALIZATION_FIELDS,
    ),
    Branch(
        id="family-based-immigrant-visa-immediate-relative",
        label={
            "en": "Family-Based Immigrant Visa - Immediate Relative",
            "es": "Visa de Inmigrante Basada en Familia - Pariente Inmediato",
        },
        description={
            "en": "You are a spouse, parent, or unmarried child under 21 of a U.S. citizen",
            "es": "Eres cónyuge, padre o hijo soltero menor de 21 años de un ciudadano estadounidense",
        },
        fields=IMMEDIATE_RELATIVE_FIELDS,
    ),
    Branch(
        id="k1-fiance-visa",
        label={"en": "K-1 Fiancé(e) Visa", "es": "Visa K-1 de Prometido/a"},
        description={
            "en": "You want to bring your fiancé(e) to the U.S. to marry",
            "es": "Quiere traer a su prometido/a a EE. UU. para casarse",
        },
        fields=K1_FIELDS,
    ),
    Branch(
        id="removal-of-conditions",
        label={"en": "Removal of Conditions", "es": "Remoción de Condiciones"},
        description={
            "en": "You have a 2-year conditional green card through marriage",
            "es": "Tiene una tarjeta verde condicional de 2 años por matrimonio",
        },
        fields=REMOVAL_OF_CONDITIONS_FIELDS,
    ),
    Branch(
        id=DEFAULT_BRANCH_ID,
        label={"en": "Other", "es": "Otro"},
        description={
            "en": "Something not listed here",
            "es": "Algo que no aparece en la lista",
        },
        fields=OTHER_FIELDS,
    ),
]



# ---------------------------------------------------------------------------
# Built-in case-type picker
# ---------------------------------------------------------------------------

CASE_TYPES: list[CaseType] = [
    CaseType("asylum", {"en": "Asylum", "es": "Asilo"},
             category="Asylum", display_order=1),
    CaseType("family", {"en": "Family Immigration", "es": "Inmigración Familiar"},
             category="Family-Based Immigration", display_order=2),
    CaseType("family-based-immigrant-visa-immediate-relative",
             {"en": "Immediate Relative Visa", "es": "Visa de Pariente Inmediato"},
             category="Family-Based Immigration", display_order=3),
    CaseType("removal-of-conditions", {"en": "Removal of Conditions", "es": "Remoción de Condiciones"},
             category="Family-Based Immigration", display_order=4),
    CaseType("k1-fiance-visa", {"en": "K-1 Fiancé(e) Visa", "es": "Visa K-1 de Prometido/a"},
             category="K-1 Fiancé(e) Visa", display_order=5),
    CaseType("naturalization", {"en": "Naturalization / Citizenship", "es": "Naturalización / Ciudadanía"},
             category="Citizenship & Naturalization", display_order=6),
    CaseType(DEFAULT_BRANCH_ID, {"en": "Other", "es": "Otro"},
             category="Other", display_order=99),
]

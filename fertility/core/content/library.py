"""
Clinical Content Library

Static, read-only clinical content for every ``FindingKey``: title,
definition, justification, patient-facing explanation, recommendations and
sources. ``CLINICAL_CONTENT`` is total over ``FindingKey``; importing this
module fails if any key lacks an entry.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple, Union

from fertility.core.content.keys import FindingKey
from fertility.utils import ContentLookupError


@dataclass(frozen=True)
class ClinicalContent:
    title: str
    definition: str
    justification: str
    explanation: str
    recommendations: Tuple[str, ...] = ()
    sources: Tuple[str, ...] = ()


# ── Sources ───────────────────────────────────────────────────────────────────
SRC_AGE       = "ACOG/ASRM Committee Opinion 589: Female age-related fertility decline (2014)"
SRC_RESERVE   = "ASRM Practice Committee: Testing and interpreting measures of ovarian reserve (2020)"
SRC_OBESITY   = "ASRM Practice Committee: Obesity and reproduction (2021)"
SRC_PCOS      = "International Evidence-based Guideline for the Assessment and Management of PCOS (2023)"
SRC_ENDO      = "ESHRE Guideline: Endometriosis (2022)"
SRC_MYOMA     = "ASRM Practice Committee: Removal of myomas in asymptomatic patients to improve fertility (2017)"
SRC_ADENO     = "Vercellini P et al., Hum Reprod 2014: Uterine adenomyosis and in vitro fertilization outcome"
SRC_POLYP     = "AAGL Practice Report: Diagnosis and management of endometrial polyps (2012)"
SRC_TUBAL     = "ASRM Practice Committee: Role of tubal surgery in the era of assisted reproductive technology (2021)"
SRC_THYROID   = "ATA Guidelines for the Diagnosis and Management of Thyroid Disease During Pregnancy (2017)"
SRC_PROLACTIN = "Endocrine Society: Diagnosis and Treatment of Hyperprolactinemia (2011)"
SRC_HOMA      = "Matthews DR et al., Diabetologia 1985: Homeostasis model assessment"
SRC_NICE      = "NICE Clinical Guideline CG156: Fertility problems (2017 update)"
SRC_SEMEN     = "WHO Laboratory Manual for the Examination and Processing of Human Semen, 6th ed. (2021)"
SRC_MALE      = "AUA/ASRM Guideline: Diagnosis and Treatment of Infertility in Men (2020)"
SRC_OVSTIM    = "ESHRE Guideline: Ovarian Stimulation for IVF/ICSI (2019)"
SRC_UNEXPLAINED = "ASRM Practice Committee: Evidence-based treatments for couples with unexplained infertility (2020)"

K = FindingKey


def _entry(title, definition, justification, explanation, recommendations=(), sources=()):
    return ClinicalContent(
        title=title,
        definition=definition,
        justification=justification,
        explanation=explanation,
        recommendations=tuple(recommendations),
        sources=tuple(sources),
    )


CLINICAL_CONTENT: Dict[FindingKey, ClinicalContent] = {
    # ── Age ───────────────────────────────────────────────────────────────
    K.AGE_TOO_YOUNG: _entry(
        "Age: Below Reproductive Maturity",
        "Age under 15 years.",
        "The hypothalamic-pituitary-ovarian axis is usually immature and cycles are mostly anovulatory.",
        "At this age a fertility estimate is not clinically meaningful.",
        ["Paediatric gynaecology assessment before any fertility evaluation."],
        [SRC_AGE],
    ),
    K.AGE_ADOLESCENT: _entry(
        "Age: Adolescence",
        "Age 15 to 17 years.",
        "Ovulatory cycles become regular over the first years after menarche.",
        "Fertility is present but ovulation may still be irregular.",
        ["Reassess once cycles have been regular for at least a year."],
        [SRC_AGE],
    ),
    K.AGE_PEAK: _entry(
        "Age: Peak Fertility",
        "Age 18 to 24 years.",
        "Oocyte quantity and quality are at their maximum.",
        "Your age is in the most favorable range for spontaneous conception.",
        ["Keep trying naturally for up to 12 months before testing."],
        [SRC_AGE],
    ),
    K.AGE_OPTIMAL: _entry(
        "Age: Optimal",
        "Age 25 to 29 years.",
        "Fertility remains excellent with minimal age-related decline.",
        "Your age is not limiting your chances of conceiving.",
        ["Keep trying naturally for up to 12 months before testing."],
        [SRC_AGE],
    ),
    K.AGE_GOOD: _entry(
        "Age: Gradual Decline",
        "Age 30 to 34 years.",
        "Fecundability starts to decline slowly after 30.",
        "Your age still allows good chances, although they are slowly decreasing.",
        ["Seek evaluation after 12 months of unsuccessful attempts."],
        [SRC_AGE],
    ),
    K.AGE_DECLINING: _entry(
        "Age: Marked Decline",
        "Age 35 to 39 years.",
        "Oocyte number and quality fall faster and aneuploidy rates rise after 35.",
        "Age is becoming an important factor in your chances each month.",
        ["Seek evaluation after 6 months of unsuccessful attempts.", "Check ovarian reserve (AMH)."],
        [SRC_AGE, SRC_NICE],
    ),
    K.AGE_LOW: _entry(
        "Age: Low Fertility",
        "Age 40 to 44 years.",
        "Most oocytes are aneuploid and the monthly chance of pregnancy is low.",
        "Age significantly reduces your monthly chance of pregnancy.",
        ["Prompt evaluation by a reproductive specialist.", "Discuss assisted reproduction early."],
        [SRC_AGE, SRC_NICE],
    ),
    K.AGE_VERY_LOW: _entry(
        "Age: Very Low Fertility",
        "Age 45 to 49 years.",
        "Spontaneous pregnancy with own oocytes is rare at this age.",
        "Pregnancy with your own eggs is unlikely; donor eggs give the best chances.",
        ["Discuss egg donation with a reproductive specialist."],
        [SRC_AGE],
    ),
    K.AGE_EXTREME: _entry(
        "Age: Extremely Low Fertility",
        "Age 50 years or more.",
        "Ovarian function is usually exhausted.",
        "Pregnancy is only realistically possible with donor eggs.",
        ["Medical assessment of pregnancy risks before considering egg donation."],
        [SRC_AGE],
    ),

    # ── BMI ───────────────────────────────────────────────────────────────
    K.BMI_UNDERWEIGHT: _entry(
        "Underweight",
        "Body mass index below 18.5 kg/m².",
        "Low energy availability suppresses GnRH pulsatility and ovulation.",
        "Being underweight can make ovulation irregular.",
        ["Nutritional counselling to reach a BMI of at least 18.5."],
        [SRC_OBESITY],
    ),
    K.BMI_OVERWEIGHT: _entry(
        "Overweight or Obesity",
        "Body mass index of 25 kg/m² or more.",
        "Excess adiposity is associated with anovulation, lower oocyte quality and miscarriage.",
        "Excess weight lowers the chance of pregnancy each month.",
        ["A 5-10% weight loss can restore ovulation.", "Screen for insulin resistance."],
        [SRC_OBESITY],
    ),

    # ── Cycle ─────────────────────────────────────────────────────────────
    K.CYCLE_SHORT: _entry(
        "Short Menstrual Cycles",
        "Cycle length of 15 to 20 days.",
        "Short cycles suggest a short follicular phase or luteal phase defect.",
        "Your cycles are shorter than usual, which can affect ovulation timing.",
        ["Confirm ovulation with a mid-luteal progesterone test."],
        [SRC_NICE],
    ),
    K.CYCLE_VERY_SHORT: _entry(
        "Very Short Menstrual Cycles",
        "Cycle length under 15 days.",
        "Bleeding this frequent is rarely ovulatory and may have a structural cause.",
        "Your cycles are very short and likely not ovulatory.",
        ["Gynaecological evaluation with pelvic ultrasound.", "Hormonal profile on day 3."],
        [SRC_NICE],
    ),
    K.CYCLE_LONG: _entry(
        "Long Menstrual Cycles",
        "Cycle length of 36 to 45 days.",
        "Long cycles mean fewer ovulations per year.",
        "You ovulate less often, so there are fewer chances to conceive each year.",
        ["Ovulation tracking.", "Evaluate for PCOS and thyroid dysfunction."],
        [SRC_NICE],
    ),
    K.CYCLE_OLIGOMENORRHEA: _entry(
        "Oligomenorrhea",
        "Cycle length over 45 days.",
        "Cycles this long are usually anovulatory.",
        "You probably ovulate only occasionally.",
        ["Ovulation induction may be needed.", "Evaluate for PCOS, prolactin and thyroid disorders."],
        [SRC_PCOS, SRC_NICE],
    ),

    # ── PCOS ──────────────────────────────────────────────────────────────
    K.PCOS_MILD: _entry(
        "PCOS (Mild)",
        "Polycystic ovary syndrome without overweight or long cycles.",
        "Mild phenotypes often keep spontaneous ovulation.",
        "You have PCOS but your current profile keeps chances close to normal.",
        ["Maintain a healthy weight.", "Track ovulation."],
        [SRC_PCOS],
    ),
    K.PCOS_MODERATE: _entry(
        "PCOS (Moderate)",
        "PCOS with BMI 25-29.9 or cycles of 36-45 days.",
        "Overweight and oligo-ovulation reduce monthly fecundability in PCOS.",
        "PCOS together with weight or cycle changes is reducing your ovulations.",
        ["Lifestyle intervention.", "Letrozole ovulation induction if needed."],
        [SRC_PCOS],
    ),
    K.PCOS_SEVERE: _entry(
        "PCOS (Severe)",
        "PCOS with BMI 30 or more or cycles over 45 days.",
        "Obesity and chronic anovulation markedly lower spontaneous pregnancy rates.",
        "PCOS is significantly limiting ovulation.",
        ["Structured weight management.", "Ovulation induction under specialist care."],
        [SRC_PCOS, SRC_OBESITY],
    ),

    # ── Structural ────────────────────────────────────────────────────────
    K.ENDOMETRIOSIS_MILD: _entry(
        "Endometriosis (Stage I-II)",
        "Superficial peritoneal endometriosis without major adhesions.",
        "Inflammation in the pelvis lowers monthly fecundability moderately.",
        "Mild endometriosis can lower your chances somewhat but natural pregnancy is common.",
        ["Expectant management or IUI with stimulation.", "Consider IVF if no pregnancy in 6-12 months."],
        [SRC_ENDO],
    ),
    K.ENDOMETRIOSIS_SEVERE: _entry(
        "Endometriosis (Stage III-IV)",
        "Deep or ovarian endometriosis with adhesions.",
        "Distorted pelvic anatomy and reduced ovarian reserve markedly lower fertility.",
        "Advanced endometriosis significantly reduces spontaneous pregnancy chances.",
        ["Referral to a reproductive specialist.", "IVF is usually the most effective option."],
        [SRC_ENDO],
    ),
    K.MYOMA_SUBMUCOSAL: _entry(
        "Submucosal Myoma",
        "Fibroid protruding into the uterine cavity.",
        "Cavity distortion impairs implantation and increases miscarriage.",
        "This fibroid can prevent the embryo from implanting.",
        ["Hysteroscopic myomectomy before trying to conceive."],
        [SRC_MYOMA],
    ),
    K.MYOMA_INTRAMURAL_LARGE: _entry(
        "Large Intramural Myoma",
        "Fibroid within the uterine wall, typically over 4 cm.",
        "Large intramural fibroids are associated with lower implantation rates.",
        "A large fibroid in the uterine wall may reduce implantation.",
        ["Specialist assessment of myomectomy benefit."],
        [SRC_MYOMA],
    ),
    K.MYOMA_SUBSEROSAL: _entry(
        "Subserosal Myoma",
        "Fibroid on the outer surface of the uterus.",
        "Subserosal fibroids do not affect the cavity and do not reduce fertility.",
        "This fibroid does not affect your chances of pregnancy.",
        ["Routine follow-up only."],
        [SRC_MYOMA],
    ),
    K.ADENOMYOSIS_FOCAL: _entry(
        "Focal Adenomyosis",
        "Localized endometrial tissue within the myometrium.",
        "Focal disease has a modest effect on implantation.",
        "Adenomyosis may slightly lower implantation.",
        ["Consider GnRH agonist pre-treatment before embryo transfer."],
        [SRC_ADENO],
    ),
    K.ADENOMYOSIS_DIFFUSE: _entry(
        "Diffuse Adenomyosis",
        "Widespread endometrial tissue throughout the myometrium.",
        "Diffuse disease lowers implantation and raises miscarriage rates.",
        "Diffuse adenomyosis significantly affects implantation.",
        ["Specialist management; GnRH agonist suppression before transfer."],
        [SRC_ADENO],
    ),
    K.POLYP_SMALL: _entry(
        "Small Endometrial Polyp",
        "Endometrial polyp under 1 cm.",
        "Small polyps have a limited effect but removal is simple.",
        "A small polyp may slightly lower implantation.",
        ["Consider hysteroscopic polypectomy."],
        [SRC_POLYP],
    ),
    K.POLYP_LARGE: _entry(
        "Large Endometrial Polyp",
        "Endometrial polyp of 1 cm or more.",
        "Larger polyps interfere with implantation.",
        "This polyp is likely to interfere with implantation.",
        ["Hysteroscopic polypectomy before trying to conceive."],
        [SRC_POLYP],
    ),
    K.POLYP_OSTIUM: _entry(
        "Polyp at the Tubal Ostium",
        "Polyp located at the uterotubal junction.",
        "Ostial polyps can block sperm and embryo transport.",
        "This polyp may block the entrance of a tube.",
        ["Hysteroscopic polypectomy."],
        [SRC_POLYP],
    ),
    K.HSG_UNILATERAL: _entry(
        "Unilateral Tubal Obstruction",
        "One fallopian tube blocked on hysterosalpingography.",
        "One patent tube still allows spontaneous conception at reduced rates.",
        "One tube is blocked, so only some ovulations can be captured.",
        ["IUI with stimulation is a reasonable first step."],
        [SRC_TUBAL],
    ),
    K.HSG_BILATERAL: _entry(
        "Bilateral Tubal Obstruction",
        "Both fallopian tubes blocked on hysterosalpingography.",
        "Without a patent tube, spontaneous conception is not possible.",
        "Both tubes are blocked, so natural conception cannot occur.",
        ["IVF is the treatment of choice."],
        [SRC_TUBAL],
    ),
    K.HSG_MALFORMATION: _entry(
        "Uterine Malformation",
        "Congenital uterine anomaly seen on hysterosalpingography.",
        "Septate and other anomalies increase implantation failure and miscarriage.",
        "The shape of your uterus may make implantation difficult.",
        ["3D ultrasound or MRI to classify the anomaly.", "Hysteroscopic septum resection if indicated."],
        [SRC_TUBAL],
    ),
    K.TUBAL_LIGATION: _entry(
        "Tubal Ligation",
        "Previous surgical sterilization by tubal occlusion.",
        "Occluded tubes prevent sperm and oocyte from meeting.",
        "With a tubal ligation, spontaneous pregnancy is not possible; "
        "surgical reversal or IVF are the options.",
        ["Assess suitability for tubal reversal.", "Otherwise, IVF."],
        [SRC_TUBAL],
    ),

    # ── AMH ───────────────────────────────────────────────────────────────
    K.AMH_HIGH: _entry(
        "High AMH",
        "AMH of 4.0 ng/mL or more.",
        "High AMH reflects many antral follicles and is typical of PCOS.",
        "You have a large egg reserve; this pattern is often linked to PCOS.",
        ["Evaluate for PCOS.", "Use mild stimulation protocols to avoid hyperstimulation."],
        [SRC_RESERVE],
    ),
    K.AMH_SLIGHTLY_LOW: _entry(
        "Slightly Reduced Ovarian Reserve",
        "AMH between 1.0 and 2.0 ng/mL.",
        "A modest reduction in the follicle pool.",
        "Your egg reserve is slightly below average.",
        ["Do not delay trying to conceive."],
        [SRC_RESERVE],
    ),
    K.AMH_LOW: _entry(
        "Low Ovarian Reserve",
        "AMH between 0.5 and 1.0 ng/mL.",
        "A reduced follicle pool shortens the reproductive window.",
        "Your egg reserve is low; time is an important factor.",
        ["Early reproductive specialist consultation."],
        [SRC_RESERVE],
    ),
    K.AMH_VERY_LOW: _entry(
        "Very Low Ovarian Reserve",
        "AMH below 0.5 ng/mL.",
        "Very low AMH predicts poor response to stimulation.",
        "Your egg reserve is very low.",
        ["Urgent reproductive specialist consultation.", "Discuss egg donation."],
        [SRC_RESERVE, SRC_OVSTIM],
    ),
    K.AMH_IMPLAUSIBLE: _entry(
        "AMH Value Needs Verification",
        "AMH result outside the range the assay reports reliably.",
        "Negative or extremely high results usually reflect laboratory or transcription errors.",
        "Your AMH result looks unusual and should be repeated.",
        ["Repeat AMH in a reference laboratory."],
        [SRC_RESERVE],
    ),

    # ── Prolactin / thyroid / insulin ─────────────────────────────────────
    K.PROLACTIN_HIGH: _entry(
        "Hyperprolactinemia",
        "Prolactin of 25 ng/mL or more.",
        "Prolactin suppresses GnRH and can stop ovulation.",
        "High prolactin can disrupt ovulation.",
        ["Repeat fasting prolactin and check macroprolactin.", "Dopamine agonist if confirmed."],
        [SRC_PROLACTIN],
    ),
    K.PROLACTIN_SEVERE: _entry(
        "Severe Hyperprolactinemia",
        "Prolactin above 200 ng/mL.",
        "Values this high suggest a prolactinoma.",
        "Your prolactin is very high and needs prompt investigation.",
        ["Pituitary MRI.", "Endocrinology referral."],
        [SRC_PROLACTIN],
    ),
    K.PROLACTIN_IMPLAUSIBLE: _entry(
        "Prolactin Value Needs Verification",
        "Prolactin result that cannot be a real measurement.",
        "Negative values indicate a data entry or laboratory error.",
        "Your prolactin result should be repeated.",
        ["Repeat prolactin."],
        [SRC_PROLACTIN],
    ),
    K.TSH_SUBOPTIMAL: _entry(
        "TSH Above Preconception Target",
        "TSH above 2.5 mUI/L.",
        "Subclinical hypothyroidism is associated with ovulatory dysfunction and miscarriage.",
        "Your thyroid function is not optimal for conception.",
        ["Repeat TSH with free T4 and TPO antibodies.", "Consider levothyroxine."],
        [SRC_THYROID],
    ),
    K.TSH_HYPOTHYROID: _entry(
        "Hypothyroidism",
        "TSH above 10 mUI/L.",
        "Overt hypothyroidism impairs ovulation and increases pregnancy complications.",
        "Your thyroid is underactive and should be treated before pregnancy.",
        ["Start levothyroxine and recheck TSH in 6 weeks."],
        [SRC_THYROID],
    ),
    K.TSH_IMPLAUSIBLE: _entry(
        "TSH Value Needs Verification",
        "TSH result that cannot be a real measurement.",
        "Negative values indicate a data entry or laboratory error.",
        "Your TSH result should be repeated.",
        ["Repeat TSH."],
        [SRC_THYROID],
    ),
    K.TPO_AB_POSITIVE: _entry(
        "Thyroid Autoimmunity",
        "Positive thyroid peroxidase antibodies.",
        "Thyroid autoimmunity raises the risk of hypothyroidism in pregnancy.",
        "Your thyroid antibodies are positive; thyroid function needs monitoring.",
        ["Check TSH each trimester once pregnant."],
        [SRC_THYROID],
    ),
    K.HOMA_MILD: _entry(
        "Mild Insulin Resistance",
        "HOMA-IR between 2.5 and 4.0.",
        "Insulin resistance impairs follicle development.",
        "Your body is slightly resistant to insulin.",
        ["Diet and exercise.", "Consider metformin with PCOS."],
        [SRC_HOMA, SRC_PCOS],
    ),
    K.HOMA_SIGNIFICANT: _entry(
        "Significant Insulin Resistance",
        "HOMA-IR between 4.0 and 20.",
        "Marked insulin resistance is linked to anovulation and pregnancy complications.",
        "Insulin resistance is affecting your metabolism and ovulation.",
        ["Endocrinology assessment.", "Metformin and lifestyle intervention."],
        [SRC_HOMA, SRC_PCOS],
    ),
    K.HOMA_SEVERE: _entry(
        "Extreme HOMA-IR",
        "HOMA-IR above 20.",
        "Values this high are rare and should be confirmed.",
        "Your insulin resistance result is extremely high and should be verified.",
        ["Repeat fasting glucose and insulin.", "Endocrinology referral."],
        [SRC_HOMA],
    ),
    K.HOMA_IMPLAUSIBLE: _entry(
        "HOMA-IR Value Needs Verification",
        "HOMA-IR result that cannot be a real measurement.",
        "Negative values indicate a calculation or data entry error.",
        "Your insulin resistance result should be recalculated.",
        ["Repeat fasting glucose and insulin."],
        [SRC_HOMA],
    ),

    # ── History ───────────────────────────────────────────────────────────
    K.INFERTILITY_MODERATE: _entry(
        "Infertility of 3-4 Years",
        "Three to five years of unsuccessful attempts.",
        "The chance of spontaneous pregnancy falls with each year of infertility.",
        "The time you have been trying lowers the chance per month.",
        ["Complete fertility work-up if not done."],
        [SRC_NICE],
    ),
    K.INFERTILITY_PROLONGED: _entry(
        "Prolonged Infertility",
        "Five or more years of unsuccessful attempts.",
        "Long-standing infertility predicts low spontaneous pregnancy rates.",
        "After this long, assisted reproduction usually offers better chances.",
        ["Discuss assisted reproduction."],
        [SRC_NICE],
    ),
    K.PELVIC_SURGERY_SINGLE: _entry(
        "Prior Pelvic Surgery",
        "One previous pelvic or abdominal surgery.",
        "Surgery can cause adhesions affecting the tubes.",
        "A previous surgery may have caused adhesions.",
        ["Check tubal patency."],
        [SRC_TUBAL],
    ),
    K.PELVIC_SURGERY_MULTIPLE: _entry(
        "Multiple Pelvic Surgeries",
        "Two or more previous pelvic or abdominal surgeries.",
        "Adhesion risk increases with each procedure.",
        "Several surgeries increase the chance of pelvic adhesions.",
        ["Check tubal patency.", "Consider diagnostic laparoscopy."],
        [SRC_TUBAL],
    ),

    # ── Male factor ───────────────────────────────────────────────────────
    K.MALE_AZOOSPERMIA: _entry(
        "Azoospermia",
        "No sperm in the ejaculate.",
        "Conception requires surgical sperm retrieval or donor sperm.",
        "No sperm were found in the sample.",
        ["Urology/andrology referral.", "Hormonal and genetic testing of the male partner."],
        [SRC_MALE, SRC_SEMEN],
    ),
    K.MALE_OLIGOZOOSPERMIA: _entry(
        "Oligozoospermia",
        "Sperm concentration below 16 million/mL.",
        "Fewer sperm reduce the chance of fertilization.",
        "The sperm count is below the reference value.",
        ["Repeat semen analysis.", "Andrology evaluation."],
        [SRC_SEMEN],
    ),
    K.MALE_ASTHENOZOOSPERMIA: _entry(
        "Asthenozoospermia",
        "Progressive motility below 30%.",
        "Poorly motile sperm rarely reach the oocyte.",
        "Sperm movement is below the reference value.",
        ["Repeat semen analysis.", "Lifestyle review (smoking, heat, alcohol)."],
        [SRC_SEMEN],
    ),
    K.MALE_TERATOZOOSPERMIA: _entry(
        "Teratozoospermia",
        "Normal forms below 4%.",
        "Abnormal morphology reduces fertilization capacity.",
        "Fewer sperm than expected have a normal shape.",
        ["Repeat semen analysis."],
        [SRC_SEMEN],
    ),
    K.MALE_IMPLAUSIBLE: _entry(
        "Semen Analysis Needs Verification",
        "Semen parameter outside its possible range.",
        "Impossible values indicate a reporting error.",
        "Part of the semen analysis looks wrong and should be repeated.",
        ["Repeat semen analysis in an accredited laboratory."],
        [SRC_SEMEN],
    ),

    # ── Interactions ──────────────────────────────────────────────────────
    K.INT_AGE40_OVARIAN_FAILURE: _entry(
        "Critical Interaction: Age 40+ with Imminent Ovarian Failure",
        "Age 40 or over, AMH below 0.3 ng/mL and long or irregular cycles.",
        "This combination indicates the ovarian reserve is nearly exhausted.",
        "Your age, very low AMH and irregular cycles together mean the chance of "
        "pregnancy with your own eggs is very low.",
        ["Urgent reproductive specialist consultation.", "Egg donation offers the best chances."],
        [SRC_RESERVE, SRC_AGE],
    ),
    K.INT_SEVERE_ENDO_MALE_FACTOR: _entry(
        "Critical Interaction: Advanced Endometriosis and Male Factor",
        "Endometriosis stage III-IV together with an abnormal semen analysis.",
        "Both partners' factors compound and make spontaneous pregnancy unlikely.",
        "Advanced endometriosis combined with a male factor makes natural conception very "
        "unlikely; IVF with ICSI is the most effective route.",
        ["IVF with ICSI."],
        [SRC_ENDO, SRC_MALE],
    ),
    K.INT_CRITICAL_AMH_AGE: _entry(
        "Interaction: Very Low AMH at Age 40+",
        "AMH below 0.5 ng/mL at age 40 or over.",
        "Poor expected response to stimulation.",
        "Your egg reserve is very low for your age.",
        ["Discuss egg donation alongside IVF with own eggs."],
        [SRC_OVSTIM],
    ),
    K.INT_TUBAL_LIGATION_ADVANCED_AGE: _entry(
        "Interaction: Tubal Ligation After Age 37",
        "Tubal ligation with maternal age over 37.",
        "Reversal success falls sharply with age, favoring IVF.",
        "At your age, IVF is usually preferred over tubal reversal.",
        ["IVF rather than tubal reversal."],
        [SRC_TUBAL],
    ),
    K.INT_SEVERE_ENDO_AGE_LOW_AMH: _entry(
        "Critical Interaction: Advanced Endometriosis, Age over 39 and Low AMH",
        "Endometriosis stage III-IV, age over 39 and AMH below 1.0 ng/mL.",
        "Each factor independently lowers fertility and together they leave little time.",
        "Advanced endometriosis at your age with a low egg reserve makes natural pregnancy "
        "very unlikely; IVF without delay is recommended.",
        ["IVF without delay.", "Consider egg donation."],
        [SRC_ENDO, SRC_RESERVE],
    ),
    K.INT_PCOS_SEVERE_OBESITY: _entry(
        "Interaction: PCOS with Severe Obesity",
        "PCOS with BMI of 35 or more.",
        "Obesity amplifies the anovulation and metabolic risks of PCOS.",
        "Weight is amplifying the effect of PCOS on your ovulation.",
        ["Structured weight loss before treatment.", "Consider bariatric assessment."],
        [SRC_PCOS, SRC_OBESITY],
    ),
    K.INT_PCOS_INSULIN_RESISTANCE: _entry(
        "Interaction: PCOS with Insulin Resistance",
        "PCOS with HOMA-IR of 3.5 or more.",
        "Hyperinsulinemia drives ovarian androgen production and anovulation.",
        "Insulin resistance is worsening your PCOS.",
        ["Metformin and lifestyle changes."],
        [SRC_PCOS, SRC_HOMA],
    ),
    K.INT_AGE_LOW_AMH: _entry(
        "Interaction: Age 38+ with Low AMH",
        "Age 38 or over with AMH below 0.8 ng/mL.",
        "Low reserve at this age leaves a short window for treatment.",
        "Your age and low egg reserve together reduce your chances considerably.",
        ["Do not delay assisted reproduction."],
        [SRC_RESERVE, SRC_AGE],
    ),
    K.INT_DIFFUSE_ADENOMYOSIS_AGE: _entry(
        "Interaction: Diffuse Adenomyosis at Age 38+",
        "Diffuse adenomyosis at age 38 or over.",
        "Implantation failure from adenomyosis adds to age-related oocyte decline.",
        "Adenomyosis and age together lower implantation chances.",
        ["IVF with GnRH agonist pre-treatment."],
        [SRC_ADENO],
    ),
    K.INT_LONG_INFERTILITY_MULTIPLE_SURGERIES: _entry(
        "Interaction: Long Infertility and Multiple Surgeries",
        "Five or more years of infertility and two or more pelvic surgeries.",
        "Suggests pelvic adhesive disease not captured by other tests.",
        "Your history suggests pelvic adhesions that may block conception.",
        ["Assisted reproduction is usually more effective than further surgery."],
        [SRC_TUBAL],
    ),
    K.INT_HYPOTHYROIDISM_TPO_AB: _entry(
        "Interaction: Elevated TSH with Thyroid Autoimmunity",
        "TSH above 4.0 mUI/L with positive TPO antibodies.",
        "Autoimmune hypothyroidism increases miscarriage risk.",
        "Your thyroid needs treatment before pregnancy.",
        ["Start levothyroxine before conceiving."],
        [SRC_THYROID],
    ),
    K.INT_PCOS_LONG_CYCLES_HIGH_PROLACTIN: _entry(
        "Interaction: PCOS, Very Long Cycles and High Prolactin",
        "PCOS with cycles over 60 days and prolactin above 50 ng/mL.",
        "Two causes of anovulation are present at once.",
        "Several hormonal factors are preventing ovulation.",
        ["Treat hyperprolactinemia first.", "Then ovulation induction."],
        [SRC_PCOS, SRC_PROLACTIN],
    ),
    K.INT_LOW_AMH_TERATOZOOSPERMIA: _entry(
        "Interaction: Low AMH and Severe Teratozoospermia",
        "AMH below 1.0 ng/mL and normal forms below 2%.",
        "Few oocytes combined with poor sperm morphology limit fertilization.",
        "Both egg reserve and sperm quality are reduced.",
        ["IVF with ICSI."],
        [SRC_RESERVE, SRC_SEMEN],
    ),
    K.INT_SUBMUCOSAL_MYOMA_ENDOMETRIOSIS: _entry(
        "Interaction: Submucosal Myoma with Endometriosis",
        "Submucosal myoma and endometriosis together.",
        "Both impair implantation through different mechanisms.",
        "The fibroid and the endometriosis together reduce implantation.",
        ["Hysteroscopic myomectomy before treatment."],
        [SRC_MYOMA, SRC_ENDO],
    ),
    K.INT_UNILATERAL_HSG_MALE_FACTOR: _entry(
        "Interaction: One Blocked Tube and Male Factor",
        "Unilateral tubal obstruction with an abnormal semen analysis.",
        "Fewer sperm and fewer usable ovulations compound each other.",
        "A blocked tube and reduced sperm quality together lower your chances.",
        ["IVF is often more effective than IUI here."],
        [SRC_TUBAL, SRC_SEMEN],
    ),
    K.INT_SMALL_POLYP_YOUNG_FAVORABLE: _entry(
        "Favorable Interaction: Small Polyp in a Young Patient",
        "Small polyp under age 34 with regular cycles and normal sperm morphology.",
        "With an otherwise good profile, polypectomy usually restores normal chances.",
        "Apart from the small polyp your profile is favorable.",
        ["Hysteroscopic polypectomy then expectant management."],
        [SRC_POLYP],
    ),
    K.INT_YOUNG_PCOS_OPTIMAL_MARKERS: _entry(
        "Favorable Interaction: Young PCOS with Optimal Markers",
        "Age under 30 with PCOS, AMH above 5, HOMA-IR below 2 and optimal TSH.",
        "Young PCOS patients without metabolic disease respond well to ovulation induction.",
        "Your PCOS profile is favorable for treatment.",
        ["Letrozole ovulation induction."],
        [SRC_PCOS],
    ),
    K.INT_MILD_ENDO_YOUNG_NORMAL_AMH: _entry(
        "Favorable Interaction: Mild Endometriosis, Young, Normal AMH",
        "Endometriosis stage I-II under age 35 with AMH of 1.5 or more.",
        "Preserved reserve and age offset the effect of mild disease.",
        "Your age and reserve make your outlook good despite mild endometriosis.",
        ["Expectant management or IUI."],
        [SRC_ENDO],
    ),
    K.INT_UNILATERAL_HSG_YOUNG_NORMAL_SEMEN: _entry(
        "Favorable Interaction: One Blocked Tube, Young, Normal Semen",
        "Unilateral obstruction under age 35 with normal sperm count and motility.",
        "Good gametes compensate partly for one blocked tube.",
        "Your age and your partner's semen quality partly compensate for the blocked tube.",
        ["IUI with stimulation."],
        [SRC_TUBAL],
    ),
    K.INT_YOUNG_PCOS_HIGH_RESPONDER: _entry(
        "Favorable Interaction: Young High-Responder PCOS",
        "Age under 32 with PCOS, AMH above 4.5 and normal semen.",
        "High reserve predicts a good response to mild stimulation.",
        "You are likely to respond well to treatment.",
        ["Mild stimulation protocols to avoid hyperstimulation."],
        [SRC_PCOS, SRC_OVSTIM],
    ),

    # ── Decisions ─────────────────────────────────────────────────────────
    K.DECISION_IVF_AGE_AMH_CRITICAL: _entry(
        "Strategy: IVF for Age and Ovarian Reserve",
        "Age 40 or over with AMH below 1.0 ng/mL.",
        "Lower-complexity treatments waste the remaining reproductive time.",
        "Given your age and reserve, IVF is the recommended first step.",
        ["Proceed directly to IVF."],
        [SRC_OVSTIM, SRC_AGE],
    ),
    K.DECISION_IVF_SEVERE_ENDO_MALE: _entry(
        "Strategy: IVF for Endometriosis and Male Factor",
        "Endometriosis stage III-IV with male factor.",
        "IUI success is very low with this combination.",
        "IVF with ICSI gives the best chances.",
        ["Proceed directly to IVF with ICSI."],
        [SRC_ENDO, SRC_MALE],
    ),
    K.DECISION_IVF_PCOS_METABOLIC: _entry(
        "Strategy: IVF for Complex Metabolic PCOS",
        "PCOS with HOMA-IR of 4 or more, cycles over 60 days and prolactin above 50.",
        "Ovulation induction is unlikely to succeed with this hormonal profile.",
        "After stabilizing your hormones, IVF is recommended.",
        ["Correct metabolic and prolactin issues, then IVF."],
        [SRC_PCOS],
    ),
    K.DECISION_IVF_TUBAL_FACTOR: _entry(
        "Strategy: IVF for Absolute Tubal Factor",
        "Tubal ligation or bilateral tubal obstruction.",
        "Without functioning tubes, only IVF or reconstructive surgery can work.",
        "Your tubes do not allow natural conception; IVF bypasses them.",
        ["IVF, or tubal reversal when the ligation is favorable."],
        [SRC_TUBAL],
    ),
    K.DECISION_ESCALATE_IVF: _entry(
        "Recommendation: Escalate to IVF",
        "One or more strategic criteria for IVF are met.",
        "Lower-complexity treatments have low expected success in this profile.",
        "We recommend discussing in-vitro fertilization with a specialist.",
        ["Reproductive specialist consultation for IVF planning."],
        [SRC_NICE],
    ),

    # ── Treatments ────────────────────────────────────────────────────────
    K.TREATMENT_RECANALIZATION: _entry(
        "Tubal Reversal Surgery",
        "Microsurgical tubal reanastomosis.",
        "Young patients with favorable ligation and enough remaining tube achieve high pregnancy rates.",
        "Your profile is favorable for tubal reversal, which allows natural pregnancies afterwards.",
        ["Laparoscopic or microsurgical reanastomosis by an experienced surgeon."],
        [SRC_TUBAL],
    ),
    K.TREATMENT_RECANALIZATION_WORKUP: _entry(
        "Pre-Reversal Assessment",
        "Further study before deciding between reversal and IVF.",
        "Candidacy cannot be established with the current data.",
        "More information is needed to choose between tubal reversal and IVF.",
        ["Obtain the operative report of the ligation.", "Semen analysis and AMH."],
        [SRC_TUBAL],
    ),
    K.TREATMENT_IVF_RECANALIZATION_POOR: _entry(
        "IVF (Reversal Not Advised)",
        "In-vitro fertilization instead of tubal reversal.",
        "Age, ligation method, short remaining tube or other factors predict poor reversal results.",
        "Tubal reversal is unlikely to succeed; IVF offers better chances.",
        ["IVF."],
        [SRC_TUBAL, SRC_OVSTIM],
    ),
    K.TREATMENT_IVF_TUBAL: _entry(
        "IVF for Bilateral Tubal Obstruction",
        "In-vitro fertilization bypassing both blocked tubes.",
        "IVF is the most effective treatment for bilateral tubal disease.",
        "IVF allows pregnancy without working tubes.",
        ["IVF; consider salpingectomy first if hydrosalpinx is present."],
        [SRC_TUBAL],
    ),
    K.TREATMENT_IVF_OVARIAN_RESERVE: _entry(
        "IVF for Age or Reduced Ovarian Reserve",
        "In-vitro fertilization indicated by age 38+ or AMH below 0.8 ng/mL.",
        "Time-sensitive fertility is best served by the most effective treatment.",
        "Because of your age or reserve, IVF gives you the best chances per month.",
        ["IVF with an individualized stimulation protocol."],
        [SRC_OVSTIM, SRC_RESERVE],
    ),
    K.TREATMENT_EGG_DONATION: _entry(
        "Egg Donation",
        "IVF with donor oocytes.",
        "At 43 or over with AMH below 0.5, own-oocyte success is very low.",
        "Donor eggs give much higher pregnancy chances at your age and reserve.",
        ["Counselling on egg donation."],
        [SRC_AGE, SRC_RESERVE],
    ),
    K.TREATMENT_ICSI_MALE_FACTOR: _entry(
        "ICSI for Male Factor",
        "Intracytoplasmic sperm injection.",
        "Low total motile sperm count makes conventional insemination unlikely to succeed.",
        "Each egg is injected with a single sperm to overcome the male factor.",
        ["IVF with ICSI."],
        [SRC_MALE, SRC_SEMEN],
    ),
    K.TREATMENT_IUI: _entry(
        "Intrauterine Insemination",
        "Placement of prepared sperm into the uterus around ovulation.",
        "Effective with one patent tube, good sperm and favorable age.",
        "IUI is a simple first treatment that fits your profile.",
        ["Three to four cycles of IUI with mild stimulation."],
        [SRC_UNEXPLAINED],
    ),
    K.TREATMENT_TIMED_INTERCOURSE: _entry(
        "Timed Intercourse",
        "Intercourse scheduled around confirmed ovulation.",
        "With a good profile and short infertility, natural conception is likely.",
        "Your profile is good; timing intercourse to ovulation may be enough.",
        ["Ovulation tracking for 6 cycles."],
        [SRC_NICE],
    ),
    K.TREATMENT_SPECIALIST_CONSULTATION: _entry(
        "Reproductive Specialist Consultation",
        "Individualized assessment by a fertility specialist.",
        "No specific treatment pathway was triggered by the available data.",
        "A specialist can complete your evaluation and tailor a plan.",
        ["Complete any missing tests before the visit."],
        [SRC_NICE],
    ),
}

_missing_content = [key.value for key in FindingKey if key not in CLINICAL_CONTENT]
if _missing_content:
    raise RuntimeError(f"Clinical content missing for: {', '.join(_missing_content)}")


def get_clinical_content(key: Union[FindingKey, str]) -> ClinicalContent:
    """
    Look up the clinical content for a finding key.

    Raises:
        ContentLookupError: if ``key`` is not a valid FindingKey value
    """
    try:
        finding_key = FindingKey(key)
    except ValueError as exc:
        raise ContentLookupError(f"Unknown finding key: {key}", key=str(key)) from exc
    return CLINICAL_CONTENT[finding_key]

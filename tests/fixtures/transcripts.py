"""
Sample interview transcripts for testing.
"""

# Two short answers sharing "onboarding" and "billing"
ONBOARDING_BILLING = [
    "I loved the onboarding but struggled with billing.",
    "Billing was confusing; support helped, though onboarding was smooth.",
]

# Recurring phrases across documents
SUPPORT_TEAM = [
    "The customer support team was great.",
    "Our customer support team answered fast.",
]

# Longer corpus: each answer repeats several multi-word phrases
PRODUCT_INTERVIEWS = [
    (
        "The mobile app crashes when uploading photos. Customer support team replied "
        "quickly and the monthly billing statement was clear. Onboarding checklist helped "
        "new users, and the dashboard loading time is slow on weekends."
    ),
    (
        "Honestly the mobile app crashes when uploading photos from the gallery. The "
        "customer support team was friendly. Monthly billing statement arrived late. The "
        "onboarding checklist helped me, but dashboard loading time is frustrating."
    ),
    (
        "Our team noticed the mobile app crashes when uploading photos. Customer support "
        "team solved it. Monthly billing statement looked correct and the onboarding "
        "checklist helped everyone. Dashboard loading time is still slow."
    ),
]

PASTED_TRANSCRIPTS = (
    "Interviewer: How was setup?\r\n"
    "Respondent: Setup was easy.\r\n"
    "\r\n"
    "   \r\n"
    "Interviewer: And billing?\n"
    "Respondent: Billing was confusing.\n"
    "\n"
)

VALID_AI_RESPONSE = {
    "themes": [
        {
            "name": "Onboarding Experience",
            "description": "Participants described onboarding as smooth and welcoming.",
            "subthemes": ["Guided setup", "Early wins"],
            "quotes": [
                {
                    "text": "I loved the onboarding",
                    "respondentId": "Respondent 1",
                    "context": "Describing the first week",
                }
            ],
            "prevalence": "2 out of 2 respondents",
            "significance": "Onboarding shapes early trust in the product.",
        },
        {
            "name": "Billing Confusion",
            "description": "Billing was hard to understand.",
            "subthemes": [],
            "quotes": [
                {
                    "text": "Billing was confusing",
                    "respondentId": "Respondent 2",
                    "context": "",
                }
            ],
            "prevalence": "2 out of 2 respondents",
            "significance": "Billing clarity affects retention.",
        },
    ],
    "keyFindings": [
        "Onboarding is a strength.",
        "Billing is a pain point.",
    ],
    "patterns": [
        {
            "name": "Positive start, negative follow-up",
            "description": "Good onboarding is followed by billing friction.",
            "examples": ["Respondent 1 loved onboarding but struggled with billing"],
        }
    ],
    "interpretations": "Early experience is positive but billing undermines it.",
    "recommendations": ["Explore billing comprehension in a larger sample."],
    "methodologyNotes": "Themes were derived inductively.",
}

from pydantic import BaseModel, ConfigDict, Field


class _Shape(BaseModel):
    model_config = ConfigDict(extra="allow")


class SwotPoint(_Shape):
    point: str
    description: str = ""


class SwotSections(_Shape):
    strengths: list[SwotPoint] = Field(default_factory=list)
    weaknesses: list[SwotPoint] = Field(default_factory=list)
    opportunities: list[SwotPoint] = Field(default_factory=list)
    threats: list[SwotPoint] = Field(default_factory=list)


class SwotAnalysis(_Shape):
    company: str
    industry: str | None = None
    analysis: SwotSections
    keyInsights: list[str]
    recommendations: list[str]


class AudienceProfile(_Shape):
    profile: str


class ToneOfVoice(_Shape):
    adjectives: list[str]
    beforeExample: str = ""
    afterExample: str = ""


class OutcomePillar(_Shape):
    pillarName: str
    painPoints: list[str] = Field(default_factory=list)
    benefits: list[str] = Field(default_factory=list)
    featureDetails: list[str] = Field(default_factory=list)
    proofPoint: str = ""


class MessagingFramework(_Shape):
    company: str
    product: str
    industry: str | None = None
    valueProposition: str
    targetAudience: AudienceProfile
    elevatorPitch: str
    longDescription: str
    toneOfVoice: ToneOfVoice
    outcomes: list[str]
    customerRequirements: list[str]
    outcomePillars: list[OutcomePillar]

from rest_framework import serializers

ASSISTANCE = ['independent', 'minimum', 'full']


def _text(max_length=500, **kwargs):
    return serializers.CharField(max_length=max_length, **kwargs)


def _optional(max_length=500):
    return serializers.CharField(max_length=max_length, required=False, allow_blank=True)


class GeneralDetailsSerializer(serializers.Serializer):
    personName = _text(200)
    knownAs = _text(200)
    dateOfBirth = _text(32)
    nhsNumber = _text(20)
    religion = _optional(100)
    weightOnTransfer = _optional(32)
    careType = serializers.ChoiceField(choices=['nursing', 'residential', 'ld', 'mental_health'], required=False)
    transferDateTime = _text(32)
    accompaniedBy = _optional(200)
    englishFirstLanguage = serializers.ChoiceField(choices=['yes', 'no'])
    firstLanguage = _optional(100)
    careHomeName = _text(200)
    careHomeAddress = _text()
    careHomePhone = _text(30)
    hospitalName = _text(200)
    hospitalAddress = _text()
    hospitalPhone = _optional(30)
    nextOfKinName = _text(200)
    nextOfKinAddress = _text()
    nextOfKinPhone = _text(30)
    gpName = _text(200)
    gpAddress = _text()
    gpPhone = _text(30)
    careManagerName = _optional(200)
    careManagerAddress = _optional()
    careManagerPhone = _optional(30)


class MedicalCareNeedsSerializer(serializers.Serializer):
    situation = _text(2000)
    background = _text(2000)
    assessment = _text(2000)
    recommendations = _text(2000)
    pastMedicalHistory = _text(2000)
    knownAllergies = _optional(1000)
    historyOfConfusion = serializers.ChoiceField(choices=['yes', 'no', 'sometimes'], required=False)
    learningDisabilityMentalHealth = _optional(1000)
    communicationIssues = _optional(1000)
    hearingAid = serializers.BooleanField()
    glasses = serializers.BooleanField()
    otherAids = _optional()
    mobilityAssistance = serializers.ChoiceField(choices=ASSISTANCE)
    mobilityAids = _optional()
    historyOfFalls = serializers.BooleanField()
    dateOfLastFall = _optional(32)
    toiletingAssistance = serializers.ChoiceField(choices=ASSISTANCE)
    continenceStatus = serializers.ChoiceField(choices=['continent', 'urine', 'faeces', 'both', 'na'], required=False)
    nutritionalAssistance = serializers.ChoiceField(choices=ASSISTANCE)
    dietType = _optional(200)
    swallowingDifficulties = serializers.BooleanField()
    enteralNutrition = serializers.BooleanField()
    mustScore = _optional(32)
    personalHygieneAssistance = serializers.ChoiceField(choices=ASSISTANCE)
    topDentures = serializers.BooleanField()
    bottomDentures = serializers.BooleanField()
    denturesAccompanying = serializers.BooleanField()


class AttachmentsSerializer(serializers.Serializer):
    currentMedications = serializers.BooleanField()
    bodyMap = serializers.BooleanField()
    observations = serializers.BooleanField()
    dnacprForm = serializers.BooleanField()
    enteralFeedingRegime = serializers.BooleanField()
    other = serializers.BooleanField()
    otherSpecify = _optional(200)


class SkinMedicationAttachmentsSerializer(serializers.Serializer):
    skinIntegrityAssistance = serializers.ChoiceField(choices=ASSISTANCE)
    bradenScore = _optional(32)
    skinStateOnTransfer = _text(2000)
    currentSkinCareRegime = _optional(2000)
    pressureRelievingEquipment = _optional()
    knownToTVN = serializers.BooleanField()
    tvnName = _optional(200)
    currentMedicationRegime = _text(2000)
    lastMedicationDateTime = _text(32)
    lastMealDrinkDateTime = _optional(32)
    attachments = AttachmentsSerializer()


class SignOffSerializer(serializers.Serializer):
    signature = _text(200)
    printedName = _text(200)
    designation = _text(200)
    contactPhone = _text(30)
    completedDate = _text(32)


class HospitalPassportSerializer(serializers.Serializer):
    residentId = serializers.IntegerField(min_value=1)
    generalDetails = GeneralDetailsSerializer()
    medicalCareNeeds = MedicalCareNeedsSerializer()
    skinMedicationAttachments = SkinMedicationAttachmentsSerializer()
    signOff = SignOffSerializer()
    status = serializers.ChoiceField(choices=['draft', 'completed'], required=False, default='completed')


class PassportStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=['draft', 'completed'])


class FilesChangedSerializer(serializers.Serializer):
    carePlan = serializers.BooleanField()
    riskAssessment = serializers.BooleanField()
    other = _optional(500)


class MedicationChangesSerializer(serializers.Serializer):
    medicationsAdded = serializers.BooleanField()
    addedMedications = _optional(2000)
    medicationsRemoved = serializers.BooleanField()
    removedMedications = _optional(2000)
    medicationsModified = serializers.BooleanField()
    modifiedMedications = _optional(2000)


class TransferLogUpdateSerializer(serializers.Serializer):
    """Full replacement payload; the resident cannot change."""
    date = serializers.DateField()
    hospitalName = serializers.CharField(max_length=200, source='hospital_name')
    reason = serializers.CharField(max_length=2000)
    outcome = serializers.CharField(max_length=2000, required=False, allow_blank=True)
    followUp = serializers.CharField(max_length=2000, source='follow_up', required=False, allow_blank=True)
    filesChanged = FilesChangedSerializer(source='files_changed', required=False)
    medicationChanges = MedicationChangesSerializer(source='medication_changes', required=False)


class TransferLogSerializer(TransferLogUpdateSerializer):
    residentId = serializers.IntegerField(min_value=1)


class TransferListQuerySerializer(serializers.Serializer):
    residentId = serializers.IntegerField(min_value=1, required=False)
    teamId = serializers.IntegerField(min_value=1, required=False)
    organizationId = serializers.IntegerField(min_value=1, required=False)

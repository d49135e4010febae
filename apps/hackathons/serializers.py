from rest_framework import serializers

from apps.common.fields import CommaSeparatedListField
from apps.common.utils import save_with_unique_slug
from apps.hackathons.models import Hackathon


class ScheduleItemSerializer(serializers.Serializer):
    time = serializers.CharField(max_length=100, allow_blank=True, required=False)
    title = serializers.CharField(max_length=200, allow_blank=True, required=False)


class HackathonSerializer(serializers.ModelSerializer):
    organizers = CommaSeparatedListField()
    sponsors = CommaSeparatedListField()
    rules = CommaSeparatedListField()
    eligibility = CommaSeparatedListField()
    tracks = CommaSeparatedListField()
    judges = CommaSeparatedListField()
    mentors = CommaSeparatedListField()
    schedule = ScheduleItemSerializer(many=True, required=False)

    class Meta:
        model = Hackathon
        fields = (
            "id",
            "title",
            "slug",
            "tagline",
            "cover",
            "desc",
            "start_at",
            "end_at",
            "location_type",
            "location_name",
            "prize_pool",
            "registration_url",
            "organizers",
            "sponsors",
            "rules",
            "eligibility",
            "tracks",
            "judges",
            "mentors",
            "schedule",
            "published",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("slug", "created_at", "updated_at")

    def validate(self, attrs):
        start_at = attrs.get("start_at", getattr(self.instance, "start_at", None))
        end_at = attrs.get("end_at", getattr(self.instance, "end_at", None))
        if start_at and end_at and end_at < start_at:
            raise serializers.ValidationError({"end_at": "End time must not be before start time."})
        return attrs

    def create(self, validated_data):
        hackathon = Hackathon(**validated_data)
        return save_with_unique_slug(hackathon, hackathon.title)

    def update(self, instance, validated_data):
        title_changed = "title" in validated_data and validated_data["title"] != instance.title
        for attr, value in validated_data.items():
            setattr(instance, attr, value)

        if title_changed:
            return save_with_unique_slug(instance, instance.title)

        instance.save()
        return instance

from careercrafter.app.models.user import User
from careercrafter.app.models.resume import (
    Education,
    PersonalInfo,
    Resume,
    Skill,
    WorkExperience,
)
from careercrafter.app.models.job_description import JobDescription

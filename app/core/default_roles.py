from typing import Any, Dict, List


# Seed roles offered to a new owner by POST /job-roles/initialize-defaults
DEFAULT_JOB_ROLES: List[Dict[str, Any]] = [
    {
        "title": "Software Engineer",
        "description": "Develop and maintain software applications using modern technologies",
        "required_skills": [
            {"skill": "JavaScript", "weight": 3},
            {"skill": "React", "weight": 2},
            {"skill": "Node.js", "weight": 2},
            {"skill": "Git", "weight": 1},
            {"skill": "SQL", "weight": 1},
        ],
        "experience_level": "mid",
        "department": "Engineering",
    },
    {
        "title": "Data Analyst",
        "description": "Analyze data to provide business insights and recommendations",
        "required_skills": [
            {"skill": "Python", "weight": 3},
            {"skill": "SQL", "weight": 3},
            {"skill": "Excel", "weight": 2},
            {"skill": "Data Analysis", "weight": 2},
            {"skill": "Tableau", "weight": 1},
        ],
        "experience_level": "mid",
        "department": "Analytics",
    },
    {
        "title": "HR Executive",
        "description": "Manage human resources operations and employee relations",
        "required_skills": [
            {"skill": "Communication", "weight": 3},
            {"skill": "Leadership", "weight": 2},
            {"skill": "Project Management", "weight": 2},
            {"skill": "Excel", "weight": 1},
        ],
        "experience_level": "mid",
        "department": "Human Resources",
    },
    {
        "title": "UI/UX Designer",
        "description": "Design user interfaces and user experiences for digital products",
        "required_skills": [
            {"skill": "Figma", "weight": 3},
            {"skill": "UI/UX", "weight": 3},
            {"skill": "Design", "weight": 2},
            {"skill": "Photoshop", "weight": 1},
            {"skill": "Illustrator", "weight": 1},
        ],
        "experience_level": "mid",
        "department": "Design",
    },
]

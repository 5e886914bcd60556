"""Hand-authored preset served whenever generation cannot meet the quality bar."""

from preset_pipeline.core.domain.preset.entities.preset import Preset

FALLBACK_PRESET: Preset = Preset.model_validate(
    {
        "name": "Generic Software Project",
        "description": "Standard software development project with baseline activities",
        "detailedDescription": (
            "Baseline preset used when AI-assisted generation is unavailable or its output "
            "did not pass validation and quality checks.\n"
            "It covers the usual lifecycle of a software project: requirements analysis, "
            "architecture, implementation, testing, deployment and documentation. Estimates "
            "are conservative.\n\n"
            "Adjust it to the project at hand:\n"
            "- actual technology stack and architecture\n"
            "- team size and seniority\n"
            "- business complexity\n"
            "- quality and compliance standards"
        ),
        "techCategory": "MULTI",
        "activities": [
            {
                "title": "Requirements Analysis and Documentation",
                "description": "Gather, analyse and document functional and non-functional requirements",
                "group": "ANALYSIS",
                "estimatedHours": 8,
                "priority": "core",
                "confidence": 0.8,
                "acceptanceCriteria": [
                    "All requirements documented and approved",
                    "User stories written with acceptance criteria",
                    "Non-functional requirements defined",
                ],
            },
            {
                "title": "System Architecture Design",
                "description": "Design the overall architecture, its components and data flow",
                "group": "ANALYSIS",
                "estimatedHours": 8,
                "priority": "core",
                "confidence": 0.8,
                "acceptanceCriteria": [
                    "Architecture diagram published",
                    "Technology stack selected and justified",
                    "Component interfaces defined",
                ],
            },
            {
                "title": "Database Schema Design and Setup",
                "description": "Design and create the schema with tables, relationships and indexes",
                "group": "DEV",
                "estimatedHours": 6,
                "priority": "core",
                "confidence": 0.8,
            },
            {
                "title": "Core Business Logic Implementation",
                "description": "Implement the main application logic and business rules",
                "group": "DEV",
                "estimatedHours": 8,
                "priority": "core",
                "confidence": 0.7,
            },
            {
                "title": "API and Interface Development",
                "description": "Build the APIs or user interfaces used to interact with the system",
                "group": "DEV",
                "estimatedHours": 8,
                "priority": "core",
                "confidence": 0.7,
            },
            {
                "title": "Authentication and Authorization",
                "description": "Implement user authentication and role-based access control",
                "group": "DEV",
                "estimatedHours": 7,
                "priority": "core",
                "confidence": 0.75,
            },
            {
                "title": "Unit Test Suite",
                "description": "Write and run unit tests for the core components",
                "group": "TEST",
                "estimatedHours": 8,
                "priority": "recommended",
                "confidence": 0.8,
            },
            {
                "title": "Integration Testing",
                "description": "Test the integration between system components",
                "group": "TEST",
                "estimatedHours": 6,
                "priority": "recommended",
                "confidence": 0.75,
            },
            {
                "title": "CI/CD Pipeline Setup",
                "description": "Configure continuous integration and deployment automation",
                "group": "OPS",
                "estimatedHours": 6,
                "priority": "recommended",
                "confidence": 0.7,
            },
            {
                "title": "Production Deployment",
                "description": "Deploy the application to the production environment",
                "group": "OPS",
                "estimatedHours": 5,
                "priority": "core",
                "confidence": 0.8,
            },
            {
                "title": "Technical Documentation",
                "description": "Write technical documentation including API reference and runbooks",
                "group": "GOVERNANCE",
                "estimatedHours": 6,
                "priority": "recommended",
                "confidence": 0.8,
            },
        ],
        "driverValues": {"complexity": 5, "quality": 6, "team": 5, "urgency": 5},
        "riskCodes": ["TECH_NEW", "SCOPE_CHANGE"],
        "reasoning": (
            "Fallback preset with standard software development activities. Generic "
            "template meant to be customised to the specifics of the project."
        ),
        "confidence": 0.5,
    }
)

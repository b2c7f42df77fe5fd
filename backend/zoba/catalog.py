"""Built-in example diagrams seeded into the template collection."""

from zoba.models import TemplateBase

DEFAULT_TEMPLATES: list[TemplateBase] = [
    TemplateBase(
        name="Simple Flowchart",
        type="flowchart",
        code="""flowchart TD
    A[Start] --> B{Is it?}
    B -->|Yes| C[OK]
    C --> D[Rethink]
    D --> B
    B -->|No| E[End]""",
        is_default=True,
    ),
    TemplateBase(
        name="Sequence Diagram",
        type="sequence",
        code="""sequenceDiagram
    participant Alice
    participant Bob
    Alice->>John: Hello John, how are you?
    loop Healthcheck
        John->>John: Fight against hypochondria
    end
    Note right of John: Rational thoughts <br/>prevail!
    John-->>Alice: Great!
    John->>Bob: How about you?
    Bob-->>John: Jolly good!""",
        is_default=True,
    ),
    TemplateBase(
        name="Class Diagram",
        type="class",
        code="""classDiagram
    Animal <|-- Duck
    Animal <|-- Fish
    Animal <|-- Zebra
    Animal : +int age
    Animal : +String gender
    Animal: +isMammal()
    Animal: +mate()
    class Duck{
        +String beakColor
        +swim()
        +quack()
    }
    class Fish{
        -int sizeInFeet
        -canEat()
    }
    class Zebra{
        +bool is_wild
        +run()
    }""",
        is_default=True,
    ),
    TemplateBase(
        name="State Diagram",
        type="stateDiagram",
        code="""stateDiagram-v2
    [*] --> Still
    Still --> [*]
    Still --> Moving
    Moving --> Still
    Moving --> Crash
    Crash --> [*]""",
        is_default=True,
    ),
    TemplateBase(
        name="Entity Relationship",
        type="erDiagram",
        code="""erDiagram
    CUSTOMER ||--o{ ORDER : places
    ORDER ||--|{ LINE-ITEM : contains
    CUSTOMER }|..|{ DELIVERY-ADDRESS : uses""",
        is_default=True,
    ),
    TemplateBase(
        name="Gantt Chart",
        type="gantt",
        code="""gantt
    title A Gantt Diagram
    dateFormat  YYYY-MM-DD
    section Section
    A task           :a1, 2024-01-01, 30d
    Another task     :after a1, 20d
    section Another
    Task in sec      :2024-01-12, 12d
    another task     :24d""",
        is_default=True,
    ),
    TemplateBase(
        name="Pie Chart",
        type="pie",
        code="""pie title What about pie?
    "Dogs" : 386
    "Cats" : 85
    "Rats" : 15""",
        is_default=True,
    ),
]

EXPERIMENTAL_TEMPLATES: list[TemplateBase] = [
    TemplateBase(
        name="Journey Map",
        type="journey",
        code="""journey
    title User Journey Map
    section Sign Up
      Landing: 5: User
      Create Account: 3: User
      Email Verification: 4: User, System
    section First Time
      Tutorial: 4: User, System
      Create Diagram: 5: User
      Save Work: 3: User, System
    section Collaboration
      Share Link: 4: User
      Real-time Edit: 5: User, Team
      Export: 4: User""",
        is_experimental=True,
    ),
    TemplateBase(
        name="Quadrant Chart",
        type="quadrantChart",
        code="""quadrantChart
    title Diagram Features Priority
    x-axis Low Effort --> High Effort
    y-axis Low Impact --> High Impact
    quadrant-1 Quick Wins
    quadrant-2 Strategic Projects
    quadrant-3 Time Sinks
    quadrant-4 Thankless Tasks
    Export: [0.3, 0.6]
    Real-time: [0.8, 0.9]
    Templates: [0.4, 0.5]
    Dark Mode: [0.2, 0.3]
    Collaboration: [0.7, 0.8]""",
        is_experimental=True,
    ),
    TemplateBase(
        name="C4 Context Diagram",
        type="C4 Context",
        code="""C4Context
title System Context diagram for Banking System

Person(customer, "Customer", "A customer of ABC Bank")
Person(employee, "Bank Employee", "An employee of ABC Bank")
Person_Ext(auditor, "External Auditor", "Audits the bank's operations")

Enterprise_Boundary(b1, "ABC Bank") {
    System(banking_system, "Core Banking System", "Handles all core banking operations")
}

System_Ext(email_system, "Email System", "External email service provider")
System_Ext(crm_system, "CRM System", "Manages customer relationships")
System_Ext(payment_gateway, "Payment Gateway", "Processes external payments")

Rel(customer, banking_system, "Views account\\ndetails and transactions")
Rel(employee, banking_system, "Manages customer\\naccounts and transactions")
Rel(auditor, banking_system, "Audits transactions\\nand operations")
Rel(banking_system, email_system, "Sends notifications\\nand alerts")
Rel(banking_system, crm_system, "Updates customer\\ninformation")
Rel(banking_system, payment_gateway, "Processes\\npayments")

UpdateLayoutConfig($c4ShapeInRow="3", $c4BoundaryInRow="2")""",
        is_experimental=True,
    ),
    TemplateBase(
        name="Block Diagram (Beta)",
        type="flowchart",
        code="""flowchart LR
    subgraph Frontend
    UI[Web Interface]
    end

    subgraph Backend
    API[API Gateway]
    Auth[Authentication]
    Cache[Redis Cache]
    Queue[Message Queue]
    end

    subgraph Database
    DB[(MongoDB)]
    end

    UI --> API
    API --> Auth
    API --> Cache
    API --> Queue
    API --> DB
    Queue --> DB""",
        is_experimental=True,
    ),
    TemplateBase(
        name="XY Chart",
        type="xychart",
        code="""xychart-beta
    title "User Growth Over Time"
    x-axis [jan, feb, mar, apr, may, jun]
    y-axis "Users" 0 --> 1000
    line [50, 150, 300, 400, 700, 1000]
    bar [40, 120, 250, 350, 650, 950]""",
        is_experimental=True,
    ),
    TemplateBase(
        name="Sankey Diagram",
        type="sankey-beta",
        code="""sankey-beta
Website Traffic,Direct,20
Website Traffic,Search,40
Website Traffic,Social,30
Website Traffic,Referral,10
Direct,Sign Up,5
Search,Sign Up,15
Social,Sign Up,10
Referral,Sign Up,3""",
        is_experimental=True,
    ),
]


def all_templates() -> list[TemplateBase]:
    return [*DEFAULT_TEMPLATES, *EXPERIMENTAL_TEMPLATES]

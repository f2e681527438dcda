from textwrap import dedent
from typing import List

from crudgen.agents.base_agent import FileSpec, FrameworkAgent
from crudgen.core.schema import CodeGenerationRequest


BASE_PACKAGE_PATH = "src/main/java/com/example/demo"


class SpringAgent(FrameworkAgent):
    framework = "spring-boot"

    def __init__(self):
        super().__init__(
            "Spring Boot",
            "Enterprise Java framework with Spring",
            "Spring Boot",
        )

    def closing_rules(self) -> str:
        return (
            'CRITICAL: Generate COMPLETE, WORKING CODE for each file. Do NOT use placeholders like "// code here". '
            "Write the ACTUAL implementation with proper package declarations, imports, and method bodies."
        )

    def file_specs(self, request: CodeGenerationRequest) -> List[FileSpec]:
        e = request.entity_name
        java = "<COMPLETE_JAVA_CODE>"
        controller = dedent("""\
            Complete REST controller with:
               - @RestController and @RequestMapping annotations
               - Autowired service
               - @GetMapping, @PostMapping, @PutMapping, @DeleteMapping methods
               - Full CRUD endpoints with proper HTTP status codes""")
        if request.include_swagger:
            controller += "\n   - Swagger/OpenAPI annotations on all endpoints"

        specs = [
            FileSpec(
                f"{BASE_PACKAGE_PATH}/model/{e}.java",
                "java",
                dedent("""\
                    Complete JPA entity class with:
                       - @Entity annotation
                       - @Id and @GeneratedValue for id field
                       - All fields from the list above with proper Java types
                       - Getters and setters
                       - No-arg constructor"""),
                java,
            ),
            FileSpec(
                f"{BASE_PACKAGE_PATH}/repository/{e}Repository.java",
                "java",
                f"Complete repository interface extending JpaRepository<{e}, Long>",
                java,
            ),
            FileSpec(
                f"{BASE_PACKAGE_PATH}/service/{e}Service.java",
                "java",
                dedent(f"""\
                    Complete service class with FULL implementations:
                       - @Service annotation
                       - Autowired repository
                       - findAll() method
                       - findById(Long id) method
                       - save({e} entity) method
                       - deleteById(Long id) method
                       - Full method bodies with business logic"""),
                java,
            ),
            FileSpec(f"{BASE_PACKAGE_PATH}/controller/{e}Controller.java", "java", controller, java),
            FileSpec(
                "src/main/resources/application.properties",
                "properties",
                dedent("""\
                    Complete properties file with:
                       - H2 database configuration
                       - JPA/Hibernate settings
                       - Server port configuration"""),
                "<COMPLETE_PROPERTIES>",
            ),
        ]
        if request.include_docker:
            specs.append(FileSpec(
                "Dockerfile",
                "dockerfile",
                dedent("""\
                    Complete, working Dockerfile for Spring Boot app with:
                       - OpenJDK 17 base image
                       - JAR file copy and execution
                       - Proper EXPOSE and ENTRYPOINT"""),
                "<COMPLETE_DOCKERFILE>",
            ))
        if request.include_cicd:
            specs.append(FileSpec(
                ".github/workflows/ci.yml",
                "yaml",
                dedent("""\
                    Complete GitHub Actions workflow with:
                       - Java/Maven setup
                       - Build and test steps
                       - Runs on push and pull requests"""),
                "<COMPLETE_YAML>",
            ))
        return specs
